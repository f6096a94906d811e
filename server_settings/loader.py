from pathlib import Path

from server_settings.config import Settings
from server_settings.exceptions import LoadIOError, LoadParseError, ParseError, SchemaError
from server_settings.schema import SchemaT, from_toml


def parse(path: Path | str, schema: type[SchemaT] = Settings) -> SchemaT:  # type: ignore[assignment]
    """
    Читает файл настроек и разбирает его в модель настроек.

    :param path: Путь до TOML файла.
    :param schema: Модель настроек, по умолчанию Settings.
        Может быть любой моделью pydantic, включающей Settings как поле.
    :return: Объект настроек.
    :raise LoadIOError: Файл невозможно прочитать.
    :raise LoadParseError: Файл не является TOML или не соответствует схеме.
    """
    path = Path(path)

    try:
        with open(path, mode="r", encoding="utf-8") as f:
            text: str = f.read()

    except OSError as err:
        raise LoadIOError(path, err) from err

    except UnicodeDecodeError as err:
        raise LoadParseError(path, ParseError(str(err))) from err

    try:
        return from_toml(text, schema)

    except (ParseError, SchemaError) as err:
        raise LoadParseError(path, err) from err

"""
Переопределение отдельных полей настроек значениями из переменных окружения.

Тип поля берется из аннотаций самого владельца поля, поэтому функции работают с любой
моделью pydantic или датаклассом, включая модели приложения, которые содержат Settings.
"""
import dataclasses
import os
import types
from collections.abc import Iterator, Mapping, Sequence, Set
from typing import Annotated, Any, Optional, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.types import Strict
from pydantic_settings import EnvSettingsSource

from server_settings.exceptions import InvalidValue

SEQUENCE_DELIMITER: str = ","
ENV_NESTING_DELIMITER: str = "__"

BOOLEAN_TOKENS: dict[str, bool] = {"true": True, "false": False}


def unwrap_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """
    Убирает Annotated и Optional из аннотации поля.

    :param annotation: Аннотация поля.
    :return: Внутренний тип и метаданные ограничений.
    """
    metadata: tuple[Any, ...] = ()

    if get_origin(annotation) is Annotated:
        annotation, *extra = get_args(annotation)
        metadata = tuple(extra)

    if get_origin(annotation) in (Union, types.UnionType):
        args: tuple[Any, ...] = tuple(arg for arg in get_args(annotation) if arg is not type(None))
        annotation = args[0] if len(args) == 1 else Union[args]

    return annotation, metadata


def is_sequence_type(annotation: Any) -> bool:
    origin: Any = get_origin(annotation) or annotation
    if not isinstance(origin, type) or issubclass(origin, (str, bytes)):
        return False

    return issubclass(origin, (Sequence, Set))


def is_structured_type(annotation: Any) -> bool:
    origin: Any = get_origin(annotation) or annotation
    if not isinstance(origin, type):
        return False

    return (
        is_sequence_type(annotation)
        or issubclass(origin, (Mapping, BaseModel))
        or dataclasses.is_dataclass(origin)
    )


def parse_text(annotation: Any, text: str) -> Any:
    """
    Приводит текст к значению указанного типа.

    Булевы значения принимаются только как "true" или "false" без учета регистра.
    Последовательности записываются через запятую, либо как JSON массив.
    Словари, модели и датаклассы записываются как JSON.

    :param annotation: Тип поля, может содержать Annotated ограничения и Optional.
    :param text: Текст значения.
    :return: Значение нужного типа.
    :raise ValueError: Текст невозможно привести к типу.
    """
    inner, metadata = unwrap_annotation(annotation)
    # Text is always coerced, strict fields only restrict file values
    metadata = tuple(item for item in metadata if not isinstance(item, Strict))
    stripped: str = text.strip()

    if inner is bool:
        if stripped.lower() not in BOOLEAN_TOKENS:
            raise ValueError(f"expected 'true' or 'false' (got {text!r})")

        return BOOLEAN_TOKENS[stripped.lower()]

    adapter: TypeAdapter[Any] = TypeAdapter(Annotated[(inner, *metadata)] if metadata else inner)

    if is_structured_type(inner) and stripped.startswith(("[", "{")):
        try:
            return adapter.validate_json(stripped, strict=False)

        except ValidationError as err:
            # "[::1]:8080,[::2]:8081" starts like JSON but is a comma separated list
            if not is_sequence_type(inner) or err.errors()[0]["type"] != "json_invalid":
                raise

    if is_sequence_type(inner):
        items: list[str] = [item.strip() for item in stripped.split(SEQUENCE_DELIMITER)] if stripped else []
        return adapter.validate_python(items, strict=False)

    if inner is str:
        return adapter.validate_python(text, strict=False)

    return adapter.validate_python(stripped, strict=False)


def field_annotation(owner: Any, field_name: str) -> Any:
    """
    Находит аннотацию поля у объекта-владельца.

    :param owner: Модель pydantic, датакласс или аннотированный объект.
    :param field_name: Имя поля.
    :return: Аннотация поля вместе с ограничениями.
    :raise AttributeError: У владельца нет такого поля.
    """
    if isinstance(owner, BaseModel):
        model_field = type(owner).model_fields.get(field_name)
        if model_field is None:
            raise AttributeError(f"{type(owner).__name__} has no field {field_name!r}")

        if model_field.metadata:
            return Annotated[(model_field.annotation, *model_field.metadata)]

        return model_field.annotation

    hints: dict[str, Any] = get_type_hints(type(owner), include_extras=True)
    if field_name not in hints:
        raise AttributeError(f"{type(owner).__name__} has no annotated field {field_name!r}")

    return hints[field_name]


def iter_field_names(owner: Any) -> Iterator[str]:
    if isinstance(owner, BaseModel):
        yield from type(owner).model_fields

    elif dataclasses.is_dataclass(owner):
        yield from (field.name for field in dataclasses.fields(owner))

    else:
        yield from get_type_hints(type(owner))


def override_field_with_value(owner: Any, field_name: str, text: str, var_name: Optional[str] = None) -> None:
    """
    Заменяет значение поля значением, полученным из текста.
    Поле либо заменяется целиком, либо остается нетронутым при ошибке.

    :param owner: Объект, которому принадлежит поле.
    :param field_name: Имя поля.
    :param text: Текстовое значение.
    :param var_name: Имя переменной окружения, из которой взято значение.
    :return: Ничего.
    :raise InvalidValue: Текст невозможно привести к типу поля.
    :raise AttributeError: У владельца нет такого поля.
    :raise FrozenSettingsError: Настройки уже опубликованы.
    """
    annotation: Any = field_annotation(owner, field_name)

    try:
        value: Any = parse_text(annotation, text)
        setattr(owner, field_name, value)

    except ValueError as err:
        raise InvalidValue(field_name, text, var_name, reason=str(err)) from err


def override_field(owner: Any, field_name: str, env_var_name: str) -> bool:
    """
    Заменяет значение поля значением переменной окружения, если она задана и не пуста.

    :param owner: Объект, которому принадлежит поле.
    :param field_name: Имя поля.
    :param env_var_name: Имя переменной окружения.
    :return: Было ли поле переопределено.
    :raise InvalidValue: Значение переменной невозможно привести к типу поля.
    """
    value: Optional[str] = os.environ.get(env_var_name)
    if not value:
        return False

    override_field_with_value(owner, field_name, value, var_name=env_var_name)
    return True


def nested_env_var_name(prefix: str, field_name: str) -> str:
    return f"{prefix}{ENV_NESTING_DELIMITER}{field_name.upper()}"


def is_nested_settings(value: Any) -> bool:
    return isinstance(value, BaseModel) or (dataclasses.is_dataclass(value) and not isinstance(value, type))


def override_from_environment(owner: Any, prefix: str) -> list[str]:
    """
    Переопределяет все поля владельца из переменных окружения вида PREFIX__FIELD_NAME.
    Вложенные модели обходятся рекурсивно: PREFIX__FIELD__SUBFIELD.

    Для моделей pydantic переменные собираются через EnvSettingsSource из pydantic-settings,
    поэтому имена переменных не зависят от регистра. Для датаклассов имена ищутся как есть.

    :param owner: Объект настроек.
    :param prefix: Префикс имен переменных, например APPLICATION.
    :return: Имена переменных, которые были применены.
    :raise InvalidValue: Значение одной из переменных невозможно привести к типу поля.
    """
    if not isinstance(owner, BaseModel):
        return override_annotated_from_environment(owner, prefix)

    source: EnvSettingsSource = EnvSettingsSource(
        type(owner),  # type: ignore[arg-type]
        case_sensitive=False,
        env_prefix=f"{prefix}{ENV_NESTING_DELIMITER}",
        env_ignore_empty=True,
    )
    applied: list[str] = []

    for field_name, field_info in type(owner).model_fields.items():
        name: str = nested_env_var_name(prefix, field_name)
        value: Any = getattr(owner, field_name)

        if is_nested_settings(value):
            applied.extend(override_from_environment(value, name))
            continue

        text, _, _ = source.get_field_value(field_info, field_name)
        if text:
            override_field_with_value(owner, field_name, text, var_name=name)
            applied.append(name)

    return applied


def override_annotated_from_environment(owner: Any, prefix: str) -> list[str]:
    applied: list[str] = []

    for field_name in iter_field_names(owner):
        name: str = nested_env_var_name(prefix, field_name)
        value: Any = getattr(owner, field_name)

        if is_nested_settings(value):
            applied.extend(override_from_environment(value, name))

        elif override_field(owner, field_name, name):
            applied.append(name)

    return applied

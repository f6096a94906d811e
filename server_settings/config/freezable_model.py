from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, PrivateAttr

from server_settings.exceptions import FrozenSettingsError


class FreezableModel(BaseModel):
    """
    Модель настроек, которая изменяема до публикации и доступна только для чтения после нее.

    Поля можно переопределять (например, из переменных окружения) сразу после загрузки,
    после вызова freeze() любое присваивание вызывает FrozenSettingsError.
    """
    model_config: ClassVar[ConfigDict] = ConfigDict(validate_assignment=True)

    _frozen: bool = PrivateAttr(default=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and self._frozen:
            raise FrozenSettingsError(type(self).__name__, name)

        super().__setattr__(name, value)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Self:
        """
        Запрещает дальнейшие изменения модели и всех вложенных моделей,
        в том числе моделей внутри списков, кортежей, множеств и словарей.

        :return: Та же модель, доступная только для чтения.
        """
        for field_name in type(self).model_fields:
            freeze_nested(getattr(self, field_name))

        self._frozen = True
        return self


def freeze_nested(value: Any) -> None:
    if isinstance(value, FreezableModel):
        value.freeze()

    elif isinstance(value, Mapping):
        for item in value.values():
            freeze_nested(item)

    elif isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            freeze_nested(item)

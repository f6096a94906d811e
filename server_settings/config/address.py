import ipaddress
import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer, model_validator
from pydantic_core import PydanticCustomError

DEFAULT_PORT: int = 9000

HOSTNAME_LABEL: re.Pattern[str] = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def is_valid_host(host: str) -> bool:
    """
    Проверяет, что строка является IP адресом или именем хоста по RFC 1123.

    :param host: Адрес для проверки.
    :return: Является ли адрес корректным.
    """
    try:
        ipaddress.ip_address(host)
        return True

    except ValueError:
        pass

    if not host or len(host) > 253:
        return False

    return all(HOSTNAME_LABEL.match(label) for label in host.removesuffix(".").split("."))


def split_host_port(value: str) -> dict[str, Any]:
    """
    Разбирает строку вида "host:port", "[v6]:port", "host" или "v6" на части.
    Если порт не указан, используется DEFAULT_PORT.

    :param value: Строка адреса.
    :return: Словарь с адресом и портом.
    """
    value = value.strip()

    if value.startswith("["):
        host, _, rest = value[1:].partition("]")
        try:
            ipaddress.IPv6Address(host)

        except ValueError:
            raise PydanticCustomError(
                "address_format_error",
                "only IPv6 addresses can be written in brackets (got {value})",
                {"value": value},
            )

        if not rest:
            return {"host": host, "port": DEFAULT_PORT}

        if not rest.startswith(":"):
            raise PydanticCustomError(
                "address_format_error",
                "{value} is not a valid address",
                {"value": value},
            )

        return {"host": host, "port": rest[1:]}

    # Several colons without brackets are a bare IPv6 address
    if value.count(":") == 1:
        host, _, port = value.partition(":")
        return {"host": host, "port": port}

    return {"host": value, "port": DEFAULT_PORT}


class Address(BaseModel):
    """
    Адрес, на котором сервер принимает соединения.

    :param host: IP адрес или имя хоста.
    :param port: Порт.
    """
    host: str
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True
    ) # noqa: overriding defaults to have it hashable

    @model_validator(mode="before")
    @classmethod
    def from_short_forms(cls, data: Any) -> Any:
        if isinstance(data, str):
            return split_host_port(data)

        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise PydanticCustomError(
                    "address_format_error",
                    "address must be a pair of host and port (got {value})",
                    {"value": list(data)},
                )

            host, port = data
            return {"host": host, "port": port}

        return data

    @field_validator("host", mode="after")
    @classmethod
    def check_host(cls, v: str) -> str:
        if not is_valid_host(v):
            raise PydanticCustomError(
                "host_validation_error",
                "{host} is not a valid host name or IP address",
                {"host": v},
            )

        return v

    @property
    def is_ipv6(self) -> bool:
        return ":" in self.host

    @model_serializer
    def to_pair(self) -> list[str | int]:
        return [self.host, self.port]

    def __str__(self) -> str:
        if self.is_ipv6:
            return f"[{self.host}]:{self.port}"

        return f"{self.host}:{self.port}"

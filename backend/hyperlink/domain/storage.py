"""
Storage Configuration Domain Model

Configuration records consumed by the storage factory.
"""

from datetime import timedelta

from pydantic import BaseModel, Field, field_validator

from hyperlink.common.keys import DEFAULT_KEY_LENGTH

DEFAULT_REDIS_PORT = 6379


def split_addr(addr: str) -> tuple[str, int]:
    """
    Split a host:port address

    Accepts "host", "host:port", "[v6addr]:port" and bare IPv6 addresses.
    A missing host means localhost and a missing port means 6379.

    Raises:
        ValueError: If the port is not a number in 1-65535
    """
    addr = (addr or "").strip()
    if addr.startswith("["):
        host, sep, rest = addr[1:].partition("]")
        if not sep or (rest and not rest.startswith(":")):
            raise ValueError(f"Invalid address: {addr!r}")
        port = rest[1:]
    elif addr.count(":") > 1:
        host, port = addr, ""
    else:
        host, _, port = addr.partition(":")

    if not port:
        return host or "localhost", DEFAULT_REDIS_PORT
    if not port.isdigit() or not 0 < int(port) < 65536:
        raise ValueError(f"Invalid port in address: {addr!r}")
    return host or "localhost", int(port)


class MemoryStorageConfig(BaseModel):
    """In-memory backend options"""

    prune_interval: timedelta = Field(
        timedelta(minutes=5), description="How often to prune expired messages"
    )


class RedisStorageConfig(BaseModel):
    """Redis backend options"""

    addr: str = Field("localhost:6379", description="Address (host:port) of the redis server")
    db: int = Field(0, ge=0, le=15, description="Redis DB index (0-15)")
    password: str = Field("", description="Redis server password")

    @field_validator("addr")
    @classmethod
    def _validate_addr(cls, v: str) -> str:
        split_addr(v)
        return v

    @property
    def host(self) -> str:
        return split_addr(self.addr)[0]

    @property
    def port(self) -> int:
        return split_addr(self.addr)[1]


class StorageConfig(BaseModel):
    """Storage factory configuration"""

    client: str = Field("memory", description="Client used for storage of messages")
    ttl: timedelta = Field(
        timedelta(hours=48), description="Time To Live for messages before they expire"
    )
    key_length: int = Field(DEFAULT_KEY_LENGTH, ge=1, description="Length of generated keys")
    memory: MemoryStorageConfig = Field(default_factory=MemoryStorageConfig)
    redis: RedisStorageConfig = Field(default_factory=RedisStorageConfig)

from __future__ import annotations
import dataclasses
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Env(Generic[T]):
    """Immutable chain of let bindings, innermost binding first."""

    name: Optional[str] = None
    value: Optional[T] = None
    parent: Optional[Env[T]] = None

    def lookup(self, name: str) -> T:
        env = self
        while env.parent is not None:
            if env.name == name:
                return env.value
            env = env.parent
        raise LookupError(name)

    def extend(self, name: str, value: T) -> Env[T]:
        return Env(name, value, self)


def empty_env() -> Env:
    return Env()

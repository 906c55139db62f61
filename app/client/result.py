from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    ok = True


@dataclass(frozen=True)
class Failure:
    reason: str
    ok = False


# Результат операций загрузки: ошибки не бросаются, а превращаются в Failure
Result = Union[Success[T], Failure]

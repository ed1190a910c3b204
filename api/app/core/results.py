from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from app.core.errors import PipelineError

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(slots=True, frozen=True)
class Err:
    error: PipelineError


Result = Union[Ok[T], Err]

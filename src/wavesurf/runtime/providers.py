from abc import abstractmethod
from typing import Generic, TypeVar

import reactivex

T = TypeVar("T")


class ObservableProvider(Generic[T]):
    """Source of a state stream consumed by the game loop."""

    @abstractmethod
    def observable(self) -> reactivex.Observable[T]:
        raise NotImplementedError("")

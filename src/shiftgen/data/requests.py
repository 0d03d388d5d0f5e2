"""Generation counter that lets callers drop stale responses."""
from dataclasses import dataclass


@dataclass(frozen=True)
class RequestToken:
    generation: int
    label: str = ""


class RequestGeneration:
    """
    Each :meth:`begin` supersedes every earlier token.

    A response is applied only while its token :meth:`is_current`;
    :meth:`cancel` invalidates the outstanding token without starting a
    new request.
    """

    def __init__(self):
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, label: str = "") -> RequestToken:
        self._generation += 1
        return RequestToken(self._generation, label)

    def is_current(self, token: RequestToken) -> bool:
        return token.generation == self._generation

    def cancel(self) -> None:
        self._generation += 1

from collections.abc import Sequence
from typing import Protocol

from tagcase.models import SourceFile


class TargetResolver(Protocol):
    def resolve(self, specifiers: Sequence[str]) -> list[SourceFile]: ...

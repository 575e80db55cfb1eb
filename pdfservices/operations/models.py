"""Pydantic models describing remote operations."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PayloadBuilder = Callable[[Sequence[str], Mapping[str, Any]], dict[str, Any]]


class InputArity(str, Enum):
    """How many local inputs an operation takes."""

    single = "single"
    multiple = "multiple"
    none = "none"  # input is passed through verbatim (url-to-pdf), never uploaded

    def accepts(self, count: int) -> bool:
        if self is InputArity.multiple:
            return count >= 1
        return count == 1

    def describe(self) -> str:
        if self is InputArity.multiple:
            return "one or more inputs"
        if self is InputArity.none:
            return "exactly one URL"
        return "exactly one input"


class OperationDescriptor(BaseModel):
    """Declarative definition of one remote transformation.

    ``payload_builder`` must produce exactly the body ``endpoint_path``
    accepts. It only ever sees the option keys listed in ``options``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    endpoint_path: str = Field(min_length=1)
    input_arity: InputArity = InputArity.single
    options: frozenset[str] = frozenset()
    payload_builder: PayloadBuilder
    result_is_single_document: bool = True
    description: str = ""

    @property
    def uploads_inputs(self) -> bool:
        return self.input_arity is not InputArity.none

    def build_payload(
        self, refs: Sequence[str], options: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Build the submission body, dropping options this operation ignores."""
        applicable = {k: v for k, v in (options or {}).items() if k in self.options}
        return self.payload_builder(refs, applicable)

"""
Pipeline
========

A small combinator for sequencing a fallible unit of work.

    result = (
        Pipeline.of(load)
        .tap(audit)            # side effect, value unchanged
        .then(transform)       # replaces the value
        .catch(recover)        # only on failure; may clear it
        .tap_catch(report)     # only on failure; failure is kept
    )()

Every builder method returns a NEW Pipeline; nothing runs until the
pipeline is invoked. Stages run in registration order. Once a stage fails,
the remaining ``tap``/``then`` stages are skipped and only ``catch`` and
``tap_catch`` stages run. An unrecovered failure is re-raised by the
invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple, Type

ExcTypes = Tuple[Type[BaseException], ...]


@dataclass(frozen=True)
class Stage:
    """One registered step of a pipeline."""

    kind: str  # "tap" | "then" | "catch" | "tap_catch"
    func: Callable[[Any], Any]
    exc_types: ExcTypes = (Exception,)

    @property
    def on_failure(self) -> bool:
        return self.kind in ("catch", "tap_catch")

    def matches(self, error: BaseException) -> bool:
        return isinstance(error, self.exc_types)


@dataclass(frozen=True)
class Pipeline:
    """
    Immutable chain descriptor.

    Parameters
    ----------
    producer : callable
        Zero-argument callable producing the initial value.
    stages : tuple of Stage
        Steps applied after the producer, in order.
    """

    producer: Callable[[], Any]
    stages: Tuple[Stage, ...] = field(default_factory=tuple)

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, producer: Callable[[], Any]) -> "Pipeline":
        if not callable(producer):
            raise TypeError(f"Pipeline producer is not callable: {producer!r}")
        return cls(producer=producer)

    def _with(self, kind: str, func: Callable[[Any], Any], exc_types: ExcTypes = (Exception,)) -> "Pipeline":
        if not callable(func):
            raise TypeError(f"Pipeline {kind} stage is not callable: {func!r}")
        return Pipeline(self.producer, self.stages + (Stage(kind, func, exc_types or (Exception,)),))

    def tap(self, observer: Callable[[Any], Any]) -> "Pipeline":
        """Run ``observer(value)`` for its side effect only."""
        return self._with("tap", observer)

    def then(self, transform: Callable[[Any], Any]) -> "Pipeline":
        """Replace the value with ``transform(value)``."""
        return self._with("then", transform)

    def catch(self, handler: Callable[[BaseException], Any], *exc_types: Type[BaseException]) -> "Pipeline":
        """
        On failure, replace the error with ``handler(error)``'s return value.

        Raising inside ``handler`` keeps the pipeline failed with the new
        error. With ``exc_types`` the handler only sees matching errors.
        """
        return self._with("catch", handler, exc_types)

    def tap_catch(self, observer: Callable[[BaseException], Any], *exc_types: Type[BaseException]) -> "Pipeline":
        """
        On failure, run ``observer(error)``; the pipeline stays failed.

        If ``observer`` raises, its error becomes the current failure.
        """
        return self._with("tap_catch", observer, exc_types)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def invoke(self) -> Any:
        value: Any = None
        error: Optional[BaseException] = None

        try:
            value = self.producer()
        except Exception as exc:
            error = exc

        for stage in self.stages:
            if error is None:
                if stage.on_failure:
                    continue
                try:
                    if stage.kind == "then":
                        value = stage.func(value)
                    else:
                        stage.func(value)
                except Exception as exc:
                    error = exc
                continue

            if not stage.on_failure or not stage.matches(error):
                continue
            try:
                if stage.kind == "catch":
                    value = stage.func(error)
                    error = None
                else:
                    stage.func(error)
            except Exception as exc:
                error = exc

        if error is not None:
            raise error
        return value

    def __call__(self) -> Any:
        return self.invoke()

    def __len__(self) -> int:
        return len(self.stages)


__all__ = ["Pipeline", "Stage"]

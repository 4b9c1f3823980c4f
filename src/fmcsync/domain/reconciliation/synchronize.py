"""Write remote-observed values back into local state."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from fmcsync.domain.diagnostics import Diagnostic, Err, Ok
from fmcsync.domain.state import StateWriteError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fmcsync.domain.diagnostics import Result
    from fmcsync.domain.state import StateHandle

    from .contracts import FieldMapping

log = getLogger(__name__)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _drifted(declared: object, observed: object) -> bool:
    declared = _blank_to_none(declared)
    if declared is None:
        return False
    return declared != _blank_to_none(observed)


@dataclass
class ObservedStateSynchronizer[R]:
    """Apply a remote object to state one field at a time.

    Declared fields the remote leaves out are kept as declared.
    The first failing write stops the loop. Fields written before the failure
    keep their new values; state can therefore be partially synchronized after
    an error, and the next successful read completes it.
    """

    mappings: Sequence[FieldMapping[R]]
    label: str

    def __call__(self, remote: R, handle: StateHandle) -> Result[tuple[str, ...]]:
        warnings: list[Diagnostic] = []
        written: list[str] = []
        for mapping in self.mappings:
            observed = mapping.extract(remote)
            if mapping.mirrors_declared:
                if _blank_to_none(observed) is None:
                    # Not reported; the declared value stands.
                    log.debug("%s %s not reported by remote", self.label, mapping.state_field)
                    continue
                declared = handle.get(mapping.state_field)
                if _drifted(declared, observed):
                    log.warning(
                        "Drift on %s %s: declared %r, remote %r",
                        self.label,
                        mapping.state_field,
                        declared,
                        observed,
                    )
                    warnings.append(
                        Diagnostic.warning(
                            f"{self.label} drifted from configuration",
                            f"{mapping.state_field}: declared {declared!r}, remote {observed!r}",
                        )
                    )
            try:
                handle.write(mapping.state_field, observed)
            except StateWriteError as exc:
                log.error(
                    "Could not store %s %s after writing %s: %s",
                    self.label,
                    mapping.state_field,
                    written,
                    exc.reason,
                )
                return Err.of(
                    f"unable to read {self.label}",
                    f"could not store field {exc.field!r}: {exc.reason}",
                    warnings=tuple(warnings),
                )
            written.append(mapping.state_field)
        return Ok(tuple(written), warnings=tuple(warnings))

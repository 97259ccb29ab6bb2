"""
Local state model.

LocalState is the consumer's view of one resource instance. Each resource
type subclasses it with its own typed fields; the generic accessors below
are the thin, name-based boundary used by the orchestrator and by the
reconciler's write-back of remote fields.
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from remote_reconciler.models.enums import LifecycleState


class LocalState(BaseModel):
    """
    Base class for per-resource local state records.

    Attributes:
        id: Remote identity. Empty before create, assigned after create or
            import, cleared after delete (the object itself is kept).
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    id: str = Field(default="", description="Remote identity (empty when absent)")

    _lifecycle: LifecycleState = PrivateAttr(default=LifecycleState.ABSENT)
    _remote_fields: set[str] = PrivateAttr(default_factory=set)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        # An assignment by the caller makes the field declared again
        if name in type(self).model_fields:
            self._remote_fields.discard(name)

    # --- identity -----------------------------------------------------------

    @property
    def identity(self) -> str:
        return self.id

    def set_identity(self, identity: str) -> None:
        self.id = identity

    def clear_identity(self) -> None:
        self.id = ""

    @property
    def lifecycle(self) -> LifecycleState:
        return self._lifecycle

    def transition(self, lifecycle: LifecycleState) -> None:
        self._lifecycle = lifecycle

    # --- name-based access ---------------------------------------------------

    def _check_field(self, name: str) -> None:
        if name not in type(self).model_fields:
            raise KeyError(f"{type(self).__name__} has no field '{name}'")

    def get(self, name: str) -> Any:
        self._check_field(name)
        return getattr(self, name)

    def set(self, name: str, value: Any) -> None:
        self._check_field(name)
        setattr(self, name, value)

    def get_or_default(self, name: str, default: Any = None) -> Any:
        """Return the field value, or `default` when it is unset or empty."""
        value = self.get(name)
        if value is None or value == "":
            return default
        return value

    def is_set(self, name: str) -> bool:
        """True when the field was explicitly given a value."""
        self._check_field(name)
        return name in self.model_fields_set

    def merge_remote(self, values: Mapping[str, Any]) -> list[str]:
        """
        Write remote field values into this state.

        Values that are None or empty are skipped, so optional computed fields
        the API did not return keep their local value. Fields whose value
        changes are marked as remote-sourced (see declared()); a value equal
        to the local one leaves the field as the caller declared it.

        Returns:
            Names of the fields that were written
        """
        written = []
        for name, value in values.items():
            if value is None or value == "":
                continue
            if self.get(name) == value:
                continue
            self.set(name, value)
            self._remote_fields.add(name)
            written.append(name)
        return written

    def declared(self, name: str) -> Any:
        """
        Field value as declared by the caller.

        Returns None for fields whose current value was written by
        merge_remote and not reassigned since.
        """
        self._check_field(name)
        if name in self._remote_fields:
            return None
        return getattr(self, name)

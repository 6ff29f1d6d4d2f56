from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeedbackSessionKeys:
    """Namespaced session-state keys for a single feedback flow."""

    flow_id: str

    @property
    def prefix(self) -> str:
        return f"fb:{self.flow_id}:"

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @property
    def view_state(self) -> str:
        return self.namespace("view_state")

    @property
    def exit_signal(self) -> str:
        return self.namespace("exit_signal")

    @property
    def exited(self) -> str:
        return self.namespace("exited")

    def all(self) -> tuple[str, ...]:
        return (self.view_state, self.exit_signal, self.exited)

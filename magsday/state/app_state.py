from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from magsday.constants import DEFAULT_VIEW, VIEWS


@dataclass
class AssistState:
    loading: bool = False
    visible: bool = False
    title: str = ""
    response: str = ""
    error: Optional[str] = None

    def begin(self, title: str) -> None:
        self.loading = True
        self.visible = True
        self.title = title
        self.response = ""
        self.error = None

    def dismiss(self) -> None:
        self.visible = False


@dataclass
class AppState:
    """UI-owned state with no persistence: the view selector and AI-assist modal."""

    view: str = DEFAULT_VIEW
    assist: AssistState = field(default_factory=AssistState)

    def select_view(self, view: str) -> str:
        if view not in VIEWS:
            raise ValueError(f"Unknown view {view!r}")
        self.view = view
        return view

    def reset(self) -> None:
        self.view = DEFAULT_VIEW
        self.assist = AssistState()

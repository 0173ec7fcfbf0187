"""Tests for console formatting helpers."""

from __future__ import annotations

import pytest

from rosadguard.models.container import ContainerState
from rosadguard.utils.output import create_table, styled_state


@pytest.mark.parametrize(
    "value,style",
    [
        (ContainerState.RUNNING.value, "green"),
        (ContainerState.EXTRACTING.value, "yellow"),
        (ContainerState.STOPPING.value, "yellow"),
        (ContainerState.ABSENT.value, "red"),
        ("enabled", "green"),
        ("disabled", "red"),
    ],
)
def test_styled_state(value: str, style: str) -> None:
    assert styled_state(value) == f"[{style}]{value}[/{style}]"


def test_unknown_state_is_left_plain() -> None:
    assert styled_state("booting") == "booting"


def test_create_table_columns() -> None:
    table = create_table("Configured Profiles", [("Profile", "cyan"), ("URL", "")])
    assert [c.header for c in table.columns] == ["Profile", "URL"]
    assert table.title == "Configured Profiles"

# tests/modgate/ui/test_notifications.py
from __future__ import annotations

import logging

import pytest

from modgate.ui.notifications import (
    SEVERITY_COLORS,
    NoticePresenter,
    NoticeRect,
    Severity,
    computeNoticeRect,
)


def test_rect_at_reference_resolution():
    rect = computeNoticeRect(1920, 1080, 0)
    assert rect == NoticeRect(x=1480.0, y=920.0, width=420.0, height=140.0)


def test_higher_rank_stacks_upwards():
    first = computeNoticeRect(1920, 1080, 0)
    second = computeNoticeRect(1920, 1080, 1)
    assert second.x == first.x
    assert first.y - second.y == pytest.approx(150.0)


def test_small_screens_clamp_scale():
    rect = computeNoticeRect(960, 540, 0)
    assert rect.width == pytest.approx(336.0)
    assert rect.height == pytest.approx(112.0)
    assert rect.x == pytest.approx(960 - 336 - 16)
    assert rect.y == pytest.approx(540 - 16 - 112)


def test_negative_rank_is_treated_as_zero():
    assert computeNoticeRect(1920, 1080, -3) == computeNoticeRect(1920, 1080, 0)


def test_show_prefixes_title_and_replaces_previous(registry):
    presenter = NoticePresenter("ModA", registry, displayName="Mod A")

    presenter.show("First", "one", Severity.WARNING)
    notice = presenter.show("Second", "two", Severity.FATAL)

    assert presenter.notice == notice
    assert notice.title == "[Mod A] Second"
    assert notice.ownerIdentity == "ModA"
    assert presenter.color == SEVERITY_COLORS[Severity.FATAL]
    assert registry.presentingIdentities() == ["ModA"]


def test_layout_is_none_without_notice(registry):
    presenter = NoticePresenter("ModA", registry)
    assert presenter.layout(1920, 1080) is None
    presenter.show("t", "m", Severity.WARNING)
    assert presenter.layout(1920, 1080) == computeNoticeRect(1920, 1080, 0)


def test_dismiss_hides_and_flags(registry):
    presenter = NoticePresenter("ModA", registry)
    presenter.dismiss()
    assert not presenter.wasDismissed

    presenter.show("t", "m", Severity.WARNING)
    presenter.dismiss()
    assert presenter.notice is None
    assert presenter.wasDismissed
    assert not registry.isPresenting("ModA")


def test_severity_picks_log_level(registry, caplog):
    presenter = NoticePresenter("ModA", registry)
    with caplog.at_level(logging.WARNING, logger="modgate.ui.notifications"):
        presenter.show("Bad", "very", Severity.FATAL)
        presenter.show("Meh", "slightly", Severity.WARNING)

    levels = [record.levelno for record in caplog.records if record.name == "modgate.ui.notifications"]
    assert levels == [logging.ERROR, logging.WARNING]

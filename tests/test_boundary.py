"""Tests for shelter.boundary.boundary — per-event failure isolation."""

import logging

import pytest

from shelter.boundary.boundary import ExceptionBoundary, default_error_panel
from shelter.boundary.outcomes import COMPLETED, DomainFailure, InternalFault
from shelter.errors import ShareError, ShareExpired, ShareNotFound


class FakeSurface:
    def __init__(self, *, broken: bool = False) -> None:
        self.broken = broken
        self.panels: list[str] = []
        self.plain: list[str] = []

    def show_error(self, message: str) -> None:
        if self.broken:
            raise RuntimeError("template exploded")
        self.panels.append(message)

    def show_plain_error(self, message: str) -> None:
        self.plain.append(message)


def _raise(exc: BaseException):
    def process(event: object) -> object:
        raise exc

    return process


class TestDispatchSuccess:
    def test_forwards_event(self) -> None:
        seen: list[object] = []
        surface = FakeSurface()
        boundary = ExceptionBoundary(seen.append, surface)

        outcome = boundary.dispatch("event")

        assert outcome is COMPLETED
        assert seen == ["event"]
        assert surface.panels == []


class TestDomainFailure:
    def test_displays_exact_message(self) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(_raise(ShareNotFound("Share 'x1' not found")), surface)

        outcome = boundary.dispatch(object())

        assert outcome == DomainFailure("Share 'x1' not found")
        assert surface.panels == ["Share 'x1' not found"]

    def test_returned_failure_is_displayed(self) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(lambda event: DomainFailure("expired"), surface)
        boundary.dispatch(object())
        assert surface.panels == ["expired"]

    def test_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        boundary = ExceptionBoundary(_raise(ShareExpired()), FakeSurface())
        with caplog.at_level(logging.WARNING, logger="shelter.ui"):
            boundary.dispatch(object())
        [record] = caplog.records
        assert record.levelno == logging.WARNING
        assert "Share expired" in record.getMessage()


class TestInternalFault:
    def test_generic_message_displayed(self) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(_raise(ValueError("db password is hunter2")), surface)

        outcome = boundary.dispatch(object())

        assert isinstance(outcome, InternalFault)
        assert surface.panels == ["Internal error"]

    def test_original_message_only_in_log(self, caplog: pytest.LogCaptureFixture) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(_raise(ValueError("db password is hunter2")), surface)
        with caplog.at_level(logging.ERROR, logger="shelter.ui"):
            boundary.dispatch(object())
        assert all("hunter2" not in panel for panel in surface.panels)
        [record] = caplog.records
        assert record.levelno == logging.ERROR
        assert "hunter2" in record.getMessage()
        assert record.exc_info is not None

    def test_custom_generic_message(self) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(
            _raise(RuntimeError("x")), surface, internal_error_message="Something went wrong"
        )
        boundary.dispatch(object())
        assert surface.panels == ["Something went wrong"]

    def test_explicit_logger(self) -> None:
        records: list[logging.LogRecord] = []

        class Collect(logging.Handler):
            def emit(self, record: logging.LogRecord) -> None:
                records.append(record)

        sink = logging.getLogger("test.sink")
        sink.addHandler(Collect())
        sink.propagate = False
        try:
            boundary = ExceptionBoundary(_raise(KeyError("k")), FakeSurface(), log=sink)
            boundary.dispatch(object())
        finally:
            sink.handlers.clear()
        assert len(records) == 1
        assert "KeyError" in records[0].getMessage()

    def test_returned_fault_is_redacted(self) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(lambda event: InternalFault("raw detail"), surface)
        boundary.dispatch(object())
        assert surface.panels == ["Internal error"]


class TestNeverRaises:
    @pytest.mark.parametrize(
        "exc",
        [ValueError("v"), KeyError("k"), ZeroDivisionError(), AssertionError(), RecursionError()],
    )
    def test_exceptions_do_not_escape(self, exc: Exception) -> None:
        boundary = ExceptionBoundary(_raise(exc), FakeSurface())
        boundary.dispatch(object())

    def test_broken_error_template_falls_back_to_plain_panel(self) -> None:
        surface = FakeSurface(broken=True)
        boundary = ExceptionBoundary(_raise(ShareNotFound()), surface)
        outcome = boundary.dispatch(object())
        assert outcome == DomainFailure("Share not found")
        assert surface.plain == ["Share not found"]

    def test_exception_that_cannot_describe_itself(self) -> None:
        class Unprintable(ShareError):
            def __init__(self) -> None:
                pass

            def __str__(self) -> str:
                raise RuntimeError("no message")

        surface = FakeSurface()
        boundary = ExceptionBoundary(_raise(Unprintable()), surface)

        outcome = boundary.dispatch(object())

        assert isinstance(outcome, InternalFault)
        assert surface.panels == ["Internal error"]

    def test_keyboard_interrupt_is_not_swallowed(self) -> None:
        boundary = ExceptionBoundary(_raise(KeyboardInterrupt()), FakeSurface())
        with pytest.raises(KeyboardInterrupt):
            boundary.dispatch(object())


class TestOutcomesAreExclusive:
    def test_single_display_per_failed_event(self) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(_raise(ShareNotFound()), surface)
        boundary.dispatch(object())
        assert len(surface.panels) == 1

    def test_success_after_failure_displays_nothing_new(self) -> None:
        surface = FakeSurface()
        calls = iter([ShareNotFound(), None])

        def process(event: object) -> None:
            exc = next(calls)
            if exc is not None:
                raise exc

        boundary = ExceptionBoundary(process, surface)
        boundary.dispatch(object())
        boundary.dispatch(object())
        assert surface.panels == ["Share not found"]


class TestDisplayError:
    def test_idempotent(self) -> None:
        surface = FakeSurface()
        boundary = ExceptionBoundary(lambda event: None, surface)
        boundary.display_error("same")
        boundary.display_error("same")
        assert surface.panels == ["same", "same"]


class TestDefaultErrorPanel:
    def test_escapes_message(self) -> None:
        html = default_error_panel("<script>alert(1)</script>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

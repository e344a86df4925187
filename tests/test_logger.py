from __future__ import annotations

import logging

from polymesh_tvl.logger import (
    ColoredFormatter,
    SilentModeFilter,
    configure_package_logging,
    setup_logging,
)


def _record(level: int, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("polymesh_tvl", level, __file__, 1, msg, None, None)


def test_silent_filter_only_passes_errors():
    f = SilentModeFilter()

    assert f.filter(_record(logging.INFO)) is False
    assert f.filter(_record(logging.WARNING)) is False
    assert f.filter(_record(logging.ERROR)) is True
    assert f.filter(_record(logging.CRITICAL)) is True


def test_colored_formatter_restores_levelname():
    record = _record(logging.WARNING)
    formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "WARNING" in formatted
    assert "\033[" in formatted
    assert record.levelname == "WARNING"


def test_setup_logging_silent_mode(capsys):
    setup_logging("INFO", silent=True)
    log = logging.getLogger("polymesh_tvl.test")

    log.info("chain data summary")
    log.warning("fallback used")
    log.error("connection failed")

    out = capsys.readouterr().out
    assert "chain data summary" not in out
    assert "fallback used" not in out
    assert "connection failed" in out


def test_setup_logging_sets_level(capsys):
    setup_logging("debug")
    log = logging.getLogger("polymesh_tvl.test")

    log.debug("detail")

    assert logging.getLogger().level == logging.DEBUG
    assert "detail" in capsys.readouterr().out
    assert logging.getLogger("substrateinterface").level == logging.WARNING


def test_configure_package_logging_is_idempotent():
    root = logging.getLogger()
    root_handlers = root.handlers[:]

    configure_package_logging("INFO")
    configure_package_logging("DEBUG")

    package = logging.getLogger("polymesh_tvl")
    assert len(package.handlers) == 1
    assert package.level == logging.DEBUG
    assert package.propagate is False
    assert root.handlers == root_handlers


def test_configure_package_logging_silent_mode(capsys):
    configure_package_logging("INFO", silent=True)
    log = logging.getLogger("polymesh_tvl.test")

    log.info("chain data summary")
    log.error("connection failed")

    out = capsys.readouterr().out
    assert "chain data summary" not in out
    assert "connection failed" in out

"""Tests for doctracer.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from doctracer.docblock.parser import TagParser
from doctracer.logging import configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "doctracer"
    assert get_logger("catalog").name == "doctracer.catalog"


def test_configure_logging_resets_handlers_and_writes_file(tmp_path: Path) -> None:
    log_file = tmp_path / "doctracer.log"

    configure_logging()
    logger = configure_logging(verbosity=1, log_file=log_file)
    get_logger("catalog").debug("Replacing %s", "Example\\Acme")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    for handler in logger.handlers:
        handler.flush()
    assert "DEBUG doctracer.catalog: Replacing Example\\Acme" in log_file.read_text(encoding="utf-8")

    configure_logging()
    assert len(logger.handlers) == 1


@pytest.mark.parametrize(("verbosity", "expected"), [(0, False), (1, False), (2, True)])
def test_malformed_tag_details_need_double_verbose(
    tmp_path: Path, verbosity: int, expected: bool
) -> None:
    log_file = tmp_path / "doctracer.log"
    configure_logging(verbosity=verbosity, log_file=log_file)

    TagParser().parse("/**\n * Summary\n * @return [type] Show as is\n */")

    for handler in get_logger().handlers:
        handler.flush()
    assert ("Keeping malformed @return tag verbatim" in log_file.read_text(encoding="utf-8")) is expected
    configure_logging()

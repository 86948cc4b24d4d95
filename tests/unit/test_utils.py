"""Unit tests for footnote ids, dependency guards, timers and logging setup."""

import logging
from unittest.mock import patch

import pytest

from layout2md.exceptions import DependencyError
from layout2md.logging_utils import configure_logging
from layout2md.utils.decorators import debug_timer, requires_dependencies
from layout2md.utils.footnotes import create_footnote_id_factory
from layout2md.utils.packages import DependencyStatus, get_package_version, inspect_dependency


@pytest.mark.unit
class TestFootnoteIds:
    def test_sequential(self):
        next_id = create_footnote_id_factory()
        assert [next_id() for _ in range(3)] == ["fn1", "fn2", "fn3"]

    def test_factories_are_independent(self):
        first, second = create_footnote_id_factory(), create_footnote_id_factory()
        first()
        assert second() == "fn1"

    def test_uuid_ids_are_short_hex(self):
        next_id = create_footnote_id_factory("uuid")
        ids = {next_id() for _ in range(5)}
        assert all(len(i) == 4 and int(i, 16) >= 0 for i in ids)


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the optional dependency guard."""

    def test_available_package_runs_function(self):
        @requires_dependencies("test", [("packaging", "packaging", "")])
        def run():
            return "ran"

        assert run() == "ran"

    def test_missing_package_raises(self):
        @requires_dependencies("pdf", [("not-a-real-dist", "not_a_real_module_xyz", "")])
        def run():
            return "ran"

        with pytest.raises(DependencyError) as exc_info:
            run()
        assert exc_info.value.missing_packages == [("not-a-real-dist", "")]
        assert isinstance(exc_info.value.__cause__, ImportError)

    def test_version_mismatch_raises(self):
        @requires_dependencies("test", [("packaging", "packaging", ">=9999")])
        def run():
            return "ran"

        with pytest.raises(DependencyError) as exc_info:
            run()
        assert exc_info.value.version_mismatches[0][0] == "packaging"

    def test_version_check_for_missing_distribution(self):
        assert get_package_version("not-a-real-dist") is None
        assert not DependencyStatus("not-a-real-dist", ">=1").satisfies_spec

    def test_inspect_installed_dependency(self):
        status = inspect_dependency("packaging", "packaging", ">=21.0")
        assert not status.is_missing
        assert status.installed_version == get_package_version("packaging")
        assert status.satisfies_spec

    def test_inspect_missing_dependency(self):
        status = inspect_dependency("not-a-real-dist", "not_a_real_module_xyz")
        assert status.is_missing
        assert isinstance(status.import_error, ImportError)
        assert status.installed_version is None


@pytest.mark.unit
class TestDebugTimer:
    def test_logs_when_debug_enabled(self, caplog):
        logger = logging.getLogger("layout2md.tests.timer")
        with caplog.at_level(logging.DEBUG, logger="layout2md.tests.timer"):
            with debug_timer(logger, "Reconstruction"):
                pass
        assert "Reconstruction completed in" in caplog.text

    def test_silent_otherwise(self, caplog):
        logger = logging.getLogger("layout2md.tests.timer_quiet")
        logger.setLevel(logging.INFO)
        with debug_timer(logger, "Reconstruction"):
            pass
        assert "Reconstruction" not in caplog.text


@pytest.mark.unit
class TestConfigureLogging:
    """Test the logging helper for embedding applications."""

    def teardown_method(self):
        package_logger = logging.getLogger("layout2md")
        for handler in package_logger.handlers:
            handler.close()
        package_logger.handlers.clear()
        package_logger.setLevel(logging.NOTSET)

    def test_string_level(self):
        logger = configure_logging("debug")
        assert logger.name == "layout2md"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_path = tmp_path / "layout2md.log"
        logger = configure_logging(logging.INFO, log_file=str(log_path))
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_path.read_text(encoding="utf-8")

    def test_unwritable_log_file_only_warns(self, tmp_path):
        with patch("logging.FileHandler", side_effect=OSError("denied")):
            logger = configure_logging(logging.INFO, log_file=str(tmp_path / "x.log"))
        assert len(logger.handlers) == 1

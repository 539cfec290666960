import logging
import math

import pytest

from yapbsp.errors import (
    BSPError,
    DimensionMismatchError,
    InconsistentStateAt2PiWrapping,
    MathInternalError,
    NonInvertibleTransformError,
    NumberIsTooLargeError,
    RegionFormatError,
)
from yapbsp.geom import check_tolerance, normalize_angle, pi2
from yapbsp.logging_config import get_logger, setup_logging
from yapbsp.spherical.oned import ArcsSet, S1Point

## unit tests for yapBSP geom.py, errors.py and logging_config.py


class TestGeom:
    """scalar helpers"""

    def test_normalize_angle(self):
        assert normalize_angle(-math.pi / 2, math.pi) == pytest.approx(1.5 * math.pi)
        assert normalize_angle(3 * math.pi, 0.0) == pytest.approx(-math.pi)
        assert normalize_angle(0.25, 0.0) == 0.25
        assert normalize_angle(pi2, math.pi) == pytest.approx(0.0)

    def test_normalize_non_finite_angle(self):
        assert math.isnan(normalize_angle(math.nan, math.pi))
        assert math.isnan(normalize_angle(math.inf, 0.0))
        assert math.isnan(normalize_angle(-math.inf, math.pi))

    def test_non_finite_circle_points(self):
        assert S1Point(math.nan).is_nan()
        assert S1Point(math.inf).is_nan()
        assert S1Point(math.nan).vector.is_nan()
        assert ArcsSet().barycenter.is_nan()

    def test_check_tolerance(self):
        assert check_tolerance(1) == 1.0
        assert check_tolerance(0.0) == 0.0
        with pytest.raises(ValueError):
            check_tolerance(-1.0e-3)
        with pytest.raises(ValueError):
            check_tolerance(math.nan)


class TestErrors:
    """exception hierarchy"""

    @pytest.mark.parametrize("error", [
        DimensionMismatchError(3, 2),
        NumberIsTooLargeError(1.0, 2.0),
        InconsistentStateAt2PiWrapping(),
        NonInvertibleTransformError(0.0),
        RegionFormatError("bad"),
    ])
    def test_argument_errors(self, error):
        assert isinstance(error, BSPError)
        assert isinstance(error, ValueError)

    def test_internal_error(self):
        error = MathInternalError()
        assert isinstance(error, BSPError)
        assert isinstance(error, RuntimeError)
        assert "internal error" in str(error)

    def test_messages(self):
        error = DimensionMismatchError(3, 2)
        assert (error.got, error.expected) == (3, 2)
        assert "3 != 2" in str(error)
        assert "[2.0, 1.0]" in str(NumberIsTooLargeError(1.0, 2.0))


class TestLogging:
    """logger configuration"""

    def teardown_method(self):
        logger = logging.getLogger("yapbsp")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def test_console(self):
        logger = setup_logging(logging.DEBUG)
        assert logger.name == "yapbsp"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        # handlers are replaced, not accumulated
        setup_logging(logging.INFO)
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "yapbsp.log"
        logger = setup_logging(logging.INFO, log_file=str(log_file))
        assert len(logger.handlers) == 2
        get_logger("polygons").info("boundary rebuilt")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text()
        assert "yapbsp.polygons" in text
        assert "boundary rebuilt" in text

    def test_get_logger(self):
        assert get_logger("io").name == "yapbsp.io"
        assert get_logger("yapbsp.io.dxf").name == "yapbsp.io.dxf"

import importlib.util
import warnings
from pathlib import Path

from util.enums import ErrorMessage

ENUMS_PATH = Path(__file__).resolve().parents[1] / "util" / "enums.py"


class TestErrorMessage:
    def test_statuses(self):
        assert ErrorMessage.INVALID_API_KEY.value.http_status == 401
        assert ErrorMessage.MISSING_API_KEY.value.http_status == 400
        assert ErrorMessage.NO_CLAIMS.value.http_status == 422
        assert ErrorMessage.RATE_LIMITED.value.http_status == 429
        assert ErrorMessage.INTERNAL_ERROR.value.http_status == 502

    def test_module_imports_without_deprecation_warnings(self):
        # load a private copy so the shared enum classes stay untouched
        spec = importlib.util.spec_from_file_location("_enums_copy", ENUMS_PATH)
        module = importlib.util.module_from_spec(spec)
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            spec.loader.exec_module(module)
        assert module.ErrorMessage.NO_CLAIMS.value.http_status == 422

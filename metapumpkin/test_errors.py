import numpy as np
import pytest

from metapumpkin.errors import Err, PumpkinError


class TestPumpkinError:
    def test_defaults(self):
        err = PumpkinError(Err.SEQUENCE)
        assert err.ctx == {}
        assert str(err) == "SEQUENCE"

    def test_message_includes_context(self):
        """Test the message names the code and its context."""
        err = PumpkinError(Err.INVALID_CONFIG, {"stem_style": "curly"})
        assert str(err) == "INVALID_CONFIG: stem_style='curly'"

    def test_cause_is_chained(self):
        """Test the underlying exception becomes __cause__."""
        cause = ValueError("bad color")
        err = PumpkinError(Err.INVALID_CONFIG, {"colormap": "x"}, cause)
        assert err.__cause__ is cause
        assert str(err).endswith(": bad color")

    def test_is_raisable(self):
        with pytest.raises(PumpkinError) as exc_info:
            raise PumpkinError(Err.ENCODING)
        assert exc_info.value.code is Err.ENCODING

    def test_reason_follows_context(self):
        """Test the reason entry reads as plain text after the other context."""
        err = PumpkinError(Err.INVALID_CONFIG, {"resolution": 1, "reason": "need at least 2 samples"})
        assert err.reason == "need at least 2 samples"
        assert str(err) == "INVALID_CONFIG: resolution=1: need at least 2 samples"

    def test_arrays_are_summarized(self):
        err = PumpkinError(Err.ENCODING, {"value": np.eye(3)})
        assert str(err) == "ENCODING: value=<float64 array (3, 3)>"

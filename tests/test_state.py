"""
Tests for the export session state machine.

Run with: pytest tests/ -v
"""
import os

import pytest

from gasketgen.model.errors import StaleGeometryError
from gasketgen.model.gaskets import ShapeKind
from gasketgen.model.state import GasketSession, Stage


@pytest.fixture
def session(flange_raw) -> GasketSession:
    s = GasketSession(kind="flange")
    s.update(**flange_raw)
    return s


class TestGasketSession:
    """Test stage transitions and export gating."""

    def test_starts_ready(self) -> None:
        s = GasketSession(kind=ShapeKind.ELLIPSE)
        assert s.stage is Stage.READY
        assert s.spec is None
        assert not s.can_export

    def test_kind_coerced(self, session) -> None:
        assert session.kind is ShapeKind.FLANGE

    def test_validate_success(self, session) -> None:
        result = session.validate()
        assert result.ok
        assert session.stage is Stage.VALIDATED
        assert session.can_export

    def test_validate_failure_stays_ready(self, session) -> None:
        session.set_input("od_x", "-5")
        result = session.validate()
        assert not result.ok
        assert session.stage is Stage.READY
        with pytest.raises(StaleGeometryError):
            session.export()

    def test_export_without_validation(self, session) -> None:
        with pytest.raises(StaleGeometryError):
            session.export()

    def test_export(self, session) -> None:
        session.validate()
        text = session.export()
        assert text.rstrip().endswith("EOF")
        assert session.stage is Stage.EXPORTED
        assert session.last_export == text

    def test_input_edit_invalidates(self, session) -> None:
        session.validate()
        session.export()
        session.set_input("bolt_hole_dia", "0.625")
        assert session.stage is Stage.READY
        assert session.spec is None
        assert session.last_export is None
        with pytest.raises(StaleGeometryError):
            session.export()

    def test_filename_does_not_invalidate(self, session) -> None:
        session.validate()
        session.set_filename("FL-500")
        assert session.stage is Stage.VALIDATED
        assert session.can_export

    def test_revalidate_after_edit(self, session) -> None:
        session.validate()
        session.set_input("bolt_hole_dia", "0.625")
        assert session.validate().ok
        assert session.spec.bolt_hole_dia == 0.625

    def test_save_uses_filename(self, session, tmp_path) -> None:
        session.set_filename("FL-500.dxf")
        session.validate()
        path = session.save(str(tmp_path))
        assert os.path.basename(path) == "FL-500.dxf"
        assert os.path.exists(path)

    def test_save_default_filename(self, session, tmp_path) -> None:
        session.validate()
        path = session.save(str(tmp_path))
        assert os.path.basename(path) == "flange_gasket.dxf"

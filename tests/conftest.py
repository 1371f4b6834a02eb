"""
Pytest configuration for gasketgen tests.

Provides raw input dictionaries for each generator, written the way a user
types them (strings, fractions, blanks), and forces the non-interactive
matplotlib backend. Loggers configured by a test are reset after it.
"""
import logging

import matplotlib
import pytest

matplotlib.use("Agg")


@pytest.fixture(autouse=True)
def reset_loggers():
    """Drop handlers that setup_logging attached during a test."""
    yield
    for name in ("gasketgen", "ezdxf"):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def ellipse_raw() -> dict[str, str]:
    return {"id_long": "10", "id_short": "6", "cross_section": "1"}


@pytest.fixture
def flange_raw() -> dict[str, str]:
    """Square flange with a circular cutout that passes every clearance."""
    return {
        "od_x": "5",
        "od_y": "5",
        "corner_radius": "1/2",
        "bolt_hole_dia": "0.5",
        "bolt_cc_x": "3.5",
        "bolt_cc_y": "3-1/2",
        "cutout_type": "circle",
        "cutout_dia": "3.0",
    }


@pytest.fixture
def flange_rect_raw(flange_raw: dict[str, str]) -> dict[str, str]:
    raw = dict(flange_raw)
    raw.update({"cutout_type": "rect", "cutout_dia": "", "cutout_x": "2", "cutout_y": "1 1/2", "cutout_radius": "0.25"})
    return raw


@pytest.fixture
def firetube_raw() -> dict[str, str]:
    """Obround firetube gasket with comfortable side clearances."""
    return {
        "od_long": "20",
        "od_short": "14",
        "id_long": "12",
        "id_short": "6",
        "cross_section": "",
        "bc_long": "16",
        "bc_short": "10",
        "hole_count": "12",
        "hole_dia": "0.5",
        "center_mode": "on",
    }


@pytest.fixture
def jumper_raw() -> dict[str, str]:
    return {
        "id_dia": "2",
        "bolt_dia": "0.5",
        "cc": "5",
        "bolt_edge_to_od": "0.5",
        "id_edge_to_od": "1",
    }

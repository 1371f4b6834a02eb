"""
Tests for the matplotlib preview.

Run with: pytest tests/ -v
"""
from matplotlib.figure import Figure

from gasketgen.model.gaskets import FiretubeSpec, FlangeSpec, JumperSpec
from gasketgen.view.preview import render_preview, save_preview


class TestPreview:
    """Test figure rendering of validated specs."""

    def test_flange_figure(self, flange_raw) -> None:
        spec = FlangeSpec.validate(flange_raw).unwrap()
        fig = render_preview(spec)
        assert isinstance(fig, Figure)
        ax = fig.axes[0]
        # 4 bolt holes + circular cutout
        assert len(ax.patches) == 5
        x0, x1 = ax.get_xlim()
        assert x0 < -2.5 and x1 > 2.5

    def test_firetube_arcs_as_patches(self, firetube_raw) -> None:
        spec = FiretubeSpec.validate(firetube_raw).unwrap()
        fig = render_preview(spec)
        # 4 obround arcs + 12 holes
        assert len(fig.axes[0].patches) == 4 + 12

    def test_drawing_input_and_title(self, jumper_raw) -> None:
        drawing = JumperSpec.validate(jumper_raw).unwrap().build_outline()
        fig = render_preview(drawing, title="Jumper")
        assert fig.axes[0].get_title() == "Jumper"

    def test_save_png(self, jumper_raw, tmp_path) -> None:
        spec = JumperSpec.validate(jumper_raw).unwrap()
        path = save_preview(spec, str(tmp_path / "jumper.png"))
        with open(path, "rb") as f:
            assert f.read(8) == b"\x89PNG\r\n\x1a\n"

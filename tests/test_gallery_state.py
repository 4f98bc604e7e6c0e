"""
Test the gallery state defaults and persistence mapping.
"""

from core.color import Color32, LIGHT_BLUE
from core.frame_context import clamp_value
from core.gallery_state import GalleryState, SCALAR_RANGE, OPACITY_RANGE


class TestDefaults:
    """Test default construction."""

    def test_default_values(self):
        """Test every field takes its documented default."""
        state = GalleryState.default()
        assert state.enabled is True
        assert state.visible is True
        assert state.opacity == 1.0
        assert state.boolean is False
        assert state.scalar == 42.0
        assert state.text == ""
        assert state.color == LIGHT_BLUE.linear_multiply(0.5)
        assert state.animate_progress_bar is False

    def test_default_equals_constructor(self):
        """Test default() and the plain constructor agree."""
        assert GalleryState.default() == GalleryState()

    def test_instances_are_independent(self):
        """Test mutating one state leaves a new one untouched."""
        first = GalleryState.default()
        first.scalar = 10.0
        assert GalleryState.default().scalar == 42.0


class TestProgress:
    """Test the progress value derived from the scalar."""

    def test_progress_points(self):
        """Test 0, 180 and 360 degrees."""
        for scalar, expected in ((0.0, 0.0), (180.0, 0.5), (360.0, 1.0)):
            assert GalleryState(scalar=scalar).progress() == expected


class TestClamp:
    """Test range clamping."""

    def test_clamp(self):
        """Test values below, inside and above the range."""
        assert clamp_value(-5, OPACITY_RANGE) == 0.0
        assert clamp_value(0.25, OPACITY_RANGE) == 0.25
        assert clamp_value(5, OPACITY_RANGE) == 1.0
        assert clamp_value(400, SCALAR_RANGE) == 360.0


class TestPersistenceMapping:
    """Test to_dict / from_dict."""

    def test_to_dict(self):
        """Test the persisted field names and color encoding."""
        data = GalleryState.default().to_dict()
        assert set(data) == {
            'enabled', 'visible', 'opacity', 'boolean',
            'scalar', 'text', 'color', 'animate_progress_bar'
        }
        assert data['color'] == list(LIGHT_BLUE.linear_multiply(0.5).to_tuple())

    def test_round_trip(self):
        """Test a customised state survives the mapping."""
        state = GalleryState(
            enabled=False, visible=False, opacity=0.3, boolean=True,
            scalar=270.0, text="hello", color=Color32(1, 2, 3, 4)
        )
        assert GalleryState.from_dict(state.to_dict()) == state

    def test_missing_keys_use_defaults(self):
        """Test a partial mapping fills in defaults."""
        state = GalleryState.from_dict({'boolean': True})
        assert state.boolean is True
        assert state.scalar == 42.0
        assert state.color == GalleryState.default().color

    def test_unknown_keys_ignored(self):
        """Test unknown keys do not fail or leak into the state."""
        state = GalleryState.from_dict({'string': 'legacy', 'scalar': 10})
        assert state.scalar == 10.0
        assert not hasattr(state, 'string')

    def test_out_of_range_values_clamped(self):
        """Test opacity and scalar are clamped on load."""
        state = GalleryState.from_dict({'opacity': -5, 'scalar': 1000})
        assert state.opacity == 0.0
        assert state.scalar == 360.0

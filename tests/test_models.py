"""Tests for screen argument parsing and serialization."""

import pytest

from displayplacer.models import DisplayMode, ParseError, ScreenConfig, ScreenInfo, format_res


class TestFromArg:
    """ScreenConfig.from_arg property-group parsing."""

    def test_full_property_group(self):
        config = ScreenConfig.from_arg(
            "id:5 res:1920x1080x60 scaling:on origin:(100,200) degree:90"
        )
        assert config == ScreenConfig(
            id=5, mirrors=[], width=1920, height=1080, hz=60,
            scaled=True, x=100, y=200, degree=90, mode=None,
        )

    def test_mirror_ids_keep_written_order(self):
        config = ScreenConfig.from_arg("id:5+6+7 res:800x600 scaling:off origin:(0,0) degree:0")
        assert config.id == 5
        assert config.mirrors == [6, 7]
        assert config.hz == 0
        assert config.scaled is False
        assert config.mode is None

    def test_mode_only(self):
        config = ScreenConfig.from_arg("id:5 mode:3")
        assert config.mode == 3
        assert config.has_mode
        assert config.degree == 0

    def test_mode_zero_is_set(self):
        assert ScreenConfig.from_arg("id:5 mode:0").has_mode

    def test_negative_origin(self):
        config = ScreenConfig.from_arg("id:1 origin:(-1440,-200)")
        assert (config.x, config.y) == (-1440, -200)

    def test_tabs_separate_tokens(self):
        config = ScreenConfig.from_arg("id:1\tres:1024x768\t\tdegree:180")
        assert (config.width, config.height, config.degree) == (1024, 768, 180)

    @pytest.mark.parametrize("value", ["45", "360", "-90"])
    def test_unknown_degree_falls_back_to_zero(self, value):
        assert ScreenConfig.from_arg(f"id:1 degree:{value}").degree == 0

    def test_scaling_anything_but_on_is_off(self):
        assert ScreenConfig.from_arg("id:1 scaling:yes").scaled is False

    def test_repeated_key_overrides(self):
        config = ScreenConfig.from_arg("id:1+2 res:800x600 id:3 res:1024x768x75")
        assert (config.id, config.mirrors) == (3, [])
        assert (config.width, config.height, config.hz) == (1024, 768, 75)

    def test_large_mirror_sets_are_kept(self):
        ids = "+".join(str(i) for i in range(1, 201))
        config = ScreenConfig.from_arg(f"id:{ids}")
        assert len(config.mirrors) == 199

    def test_unknown_key(self):
        with pytest.raises(ParseError, match="unknown property"):
            ScreenConfig.from_arg("zz:1")

    def test_missing_id(self):
        with pytest.raises(ParseError, match="missing id"):
            ScreenConfig.from_arg("res:1920x1080 origin:(0,0)")

    @pytest.mark.parametrize("arg", ["id:abc", "id:", "id:x+6 res:800x600"])
    def test_unusable_id(self, arg):
        with pytest.raises(ParseError):
            ScreenConfig.from_arg(arg)

    @pytest.mark.parametrize("value", ["abc", "ninety", ""])
    def test_non_numeric_degree_is_zero(self, value):
        config = ScreenConfig.from_arg(f"id:1 degree:{value}")
        assert config.degree == 0
        assert not config.invalid

    def test_bare_degree_key_is_zero(self):
        assert ScreenConfig.from_arg("id:1 degree").degree == 0

    @pytest.mark.parametrize("token, key", [
        ("res:1920", "res"),
        ("res:widexhigh", "res"),
        ("res:1920x1080xfast", "res"),
        ("origin:(10)", "origin"),
        ("origin:(a,b)", "origin"),
        ("mode:first", "mode"),
        ("id:1+two", "id"),
    ])
    def test_malformed_value_is_recorded(self, token, key):
        config = ScreenConfig.from_arg(f"id:1 {token}")
        assert config.id == 1
        assert config.invalid == {key: token}

    def test_malformed_value_keeps_default(self):
        config = ScreenConfig.from_arg("id:1 res:abc origin:(5,x) mode:?")
        assert (config.width, config.height, config.hz) == (0, 0, 0)
        assert (config.x, config.y) == (0, 0)
        assert config.mode is None

    def test_later_token_clears_malformed_one(self):
        config = ScreenConfig.from_arg("id:1 res:abc res:800x600")
        assert (config.width, config.height) == (800, 600)
        assert not config.invalid


class TestToArg:
    """ScreenConfig.to_arg serialization."""

    def test_resolution_with_hz(self):
        config = ScreenConfig(id=5, mirrors=[6], width=1920, height=1080, hz=60,
                              scaled=True, x=-10, y=20, degree=270)
        assert config.to_arg() == (
            "id:5+6 res:1920x1080x60 scaling:on origin:(-10,20) degree:270"
        )

    def test_resolution_without_hz(self):
        config = ScreenConfig(id=5, width=1440, height=900)
        assert config.to_arg() == "id:5 res:1440x900 scaling:off origin:(0,0) degree:0"

    def test_explicit_mode_replaces_resolution(self):
        config = ScreenConfig(id=7, mode=3, x=1, y=2)
        assert config.to_arg() == "id:7 mode:3 origin:(1,2) degree:0"

    def test_parse_problems_do_not_affect_equality(self):
        assert ScreenConfig.from_arg("id:1 mode:x") == ScreenConfig(id=1)

    def test_parses_back(self):
        config = ScreenConfig(id=9, mirrors=[4, 2], width=800, height=600, hz=75,
                              scaled=False, x=-800, y=0, degree=90)
        assert ScreenConfig.from_arg(config.to_arg()) == config


class TestDisplayMode:
    def test_scaled_only_at_density_two(self):
        assert DisplayMode(0, 1, 1, density=2.0).scaled
        assert not DisplayMode(0, 1, 1, density=1.0).scaled
        assert not DisplayMode(0, 1, 1, density=1.5).scaled

    def test_res_label(self):
        assert DisplayMode(0, 1920, 1080, 60).res_label() == "1920x1080x60"
        assert DisplayMode(0, 1920, 1080, 0).res_label() == "1920x1080"

    def test_format_res(self):
        assert format_res(640, 480) == "640x480"
        assert format_res(640, 480, 144) == "640x480x144"


class TestScreenInfo:
    def test_diagonal_rounds_to_inches(self):
        screen = ScreenInfo(id=1, physical_width_mm=597.0, physical_height_mm=336.0)
        assert screen.diagonal_inches == 27

    def test_current_mode_lookup(self):
        modes = [DisplayMode(0, 800, 600), DisplayMode(1, 1024, 768)]
        assert ScreenInfo(id=1, modes=modes, current_mode=1).current == modes[1]
        assert ScreenInfo(id=1, modes=modes, current_mode=5).current is None
        assert ScreenInfo(id=1, modes=modes).current is None

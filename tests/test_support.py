"""Tests for configuration, rendering and logging."""

import io

import numpy as np
import pytest
from chip8vm import RunConfig, chip8_display_to_rgb, create_color_scheme
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SCREEN_SIZE
from chip8vm.logging import ConsoleLogger, default_log_level


class TestRunConfig:
    """Run configuration defaults and validation."""

    def test_defaults(self):
        config = RunConfig().validate()
        assert config.instruction_hz == 700
        assert config.timer_hz == 60
        assert config.restart_on_error is True

    @pytest.mark.parametrize("field", ["instruction_hz", "timer_hz", "frame_hz", "scale"])
    def test_rejects_non_positive(self, field):
        with pytest.raises(ValueError):
            RunConfig(**{field: 0}).validate()

    def test_rejects_unknown_scheme(self):
        with pytest.raises(ValueError):
            RunConfig(color_scheme="sepia").validate()

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("CHIP8_LOG", "debug")
        assert RunConfig.from_env().log_level == "DEBUG"

    def test_bad_env_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("CHIP8_LOG", "chatty")
        assert default_log_level() == "WARNING"


class TestRendering:
    """Frames to RGB."""

    def test_shape_and_colors(self):
        frame = bytearray(SCREEN_SIZE)
        frame[SCREEN_WIDTH + 2] = 1  # (2, 1)
        on, off = create_color_scheme("amber")

        rgb = chip8_display_to_rgb(bytes(frame), scale=2, on_color=on, off_color=off)

        assert rgb.shape == (SCREEN_HEIGHT * 2, SCREEN_WIDTH * 2, 3)
        assert tuple(rgb[2, 4]) == on
        assert tuple(rgb[3, 5]) == on
        assert tuple(rgb[0, 0]) == off

    def test_accepts_arrays(self):
        rgb = chip8_display_to_rgb(np.ones(SCREEN_SIZE, dtype=np.uint8), scale=1)
        assert (rgb == (0, 255, 0)).all()

    def test_rejects_wrong_size(self):
        with pytest.raises(ValueError):
            chip8_display_to_rgb(b"\x00" * 10)

    def test_unknown_scheme(self):
        with pytest.raises(ValueError):
            create_color_scheme("sepia")


class TestConsoleLogger:
    """Leveled console output."""

    def test_filters_by_level(self):
        stream = io.StringIO()
        logger = ConsoleLogger("test", log_level="WARNING", stream=stream, show_timestamps=False)

        logger.info("hidden")
        logger.error("shown")

        assert stream.getvalue() == "[   ERROR][test] shown\n"

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError):
            ConsoleLogger(log_level="LOUD")

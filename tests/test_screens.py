"""
Tests for screen templates and output sinks.
"""

import io
import pytest
from decimal import Decimal

from display import (
    ANSI_CLEAR_SCREEN, BufferedDisplay, ConsoleDisplay, Display, create_display,
)
from screens import DEFAULT_TEMPLATES, ScreenRenderer, get_screen_renderer, render_screen


class TestScreenRenderer:
    """Test template lookup and filters."""

    def test_chance_filter(self, renderer):
        template = renderer.env.from_string("{{ p | chance }}")
        assert template.render(p=Decimal('0.65')) == "65%"
        assert template.render(p=0.25) == "25%"

    def test_chance_filter_passes_through_garbage(self, renderer):
        template = renderer.env.from_string("{{ p | chance }}")
        assert template.render(p='n/a') == "n/a"

    def test_keys_filter(self, renderer):
        template = renderer.env.from_string("{{ k | keys }}")
        assert template.render(k=['A', 'C']) == "A C"

    def test_missing_template_placeholder(self, renderer):
        assert renderer.render('nope.txt', {}) == "[Template 'nope.txt' not found]"

    def test_wrong_input_lines(self, renderer):
        assert renderer.render_lines('wrong_input.txt', {}) == ["Wrong input, try again please."]

    def test_template_dir_overrides_builtin(self, tmp_path):
        (tmp_path / 'initial.txt').write_text("Press {{ start_key }} to play")
        renderer = ScreenRenderer(template_dir=tmp_path)

        assert renderer.render_lines('initial.txt', {'start_key': 'S'}) == ["Press S to play"]

    def test_template_dir_j2_suffix(self, tmp_path):
        (tmp_path / 'farewell.txt.j2').write_text("See you")
        renderer = ScreenRenderer(template_dir=tmp_path)

        assert renderer.render('farewell.txt', {}) == "See you"

    def test_template_dir_falls_back_to_builtin(self, tmp_path):
        renderer = ScreenRenderer(template_dir=tmp_path)
        assert renderer.render_lines('farewell.txt', {}) == ["Goodbye."]

    def test_missing_template_dir_uses_builtin(self, tmp_path):
        renderer = ScreenRenderer(template_dir=tmp_path / 'absent')
        assert renderer.render_lines('statistics.txt', {'rows': []}) == [
            "Your results:", "Press any key to return home.",
        ]

    def test_every_builtin_renders(self, renderer):
        context = {
            'start_key': 'S', 'stats_key': 'G', 'rows': [],
            'features': [], 'max_attempts': 10, 'success_probability': Decimal('0.75'),
            'available': [], 'complete': True,
        }
        for name in DEFAULT_TEMPLATES:
            assert renderer.render(name, context).strip()

    def test_global_renderer_is_cached(self):
        assert get_screen_renderer() is get_screen_renderer()
        assert render_screen('farewell.txt', {}) == ["Goodbye."]


class TestDisplays:
    """Test output sinks."""

    def test_console_writes_lines(self):
        stream = io.StringIO()
        display = ConsoleDisplay(stream=stream)

        display.write_lines(["one", "two"])

        assert stream.getvalue() == "one\ntwo\n"

    def test_console_clear_uses_ansi(self):
        stream = io.StringIO()
        ConsoleDisplay(stream=stream).clear()
        assert stream.getvalue() == ANSI_CLEAR_SCREEN

    def test_console_clear_without_ansi(self):
        stream = io.StringIO()
        ConsoleDisplay(stream=stream, use_ansi=False).clear()
        assert stream.getvalue() == "\n"

    def test_buffer_clear_drops_lines(self):
        display = BufferedDisplay()
        display.write_line("old")
        display.clear()
        display.write_line("new")

        assert display.lines == ["new"]
        assert display.screen == "new"
        assert display.clear_count == 1
        assert [c['method'] for c in display.call_history] == ['write_line', 'clear', 'write_line']

    def test_factory(self):
        assert isinstance(create_display('buffer'), BufferedDisplay)
        console = create_display('console', stream=io.StringIO())
        assert isinstance(console, ConsoleDisplay)
        assert isinstance(console, Display)

    def test_factory_rejects_unknown_type(self):
        with pytest.raises(ValueError):
            create_display('hologram')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])

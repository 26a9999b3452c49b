"""Tests for the Streamlit page."""

from pathlib import Path

import pytest

streamlit_testing = pytest.importorskip("streamlit.testing.v1")

APP_PATH = Path(__file__).resolve().parents[1] / "app" / "main.py"


class TestPersonCards:
    """Rendering of the people section."""

    def test_person_name_is_escaped_in_card(self):
        at = streamlit_testing.AppTest.from_file(str(APP_PATH))
        at.run()

        at.text_input[0].input("<b>Eve</b>")
        next(b for b in at.button if b.label == "Add").click()
        at.run()

        cards = [md.value for md in at.markdown if "person-card" in md.value]
        assert any("&lt;b&gt;Eve&lt;/b&gt;" in card for card in cards)
        assert not any("<b>Eve</b>" in card for card in cards)

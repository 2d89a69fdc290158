"""Tests for the Streamlit gallery surface, with streamlit itself mocked out."""
from unittest.mock import MagicMock, call, patch

import pytest

from components import gallery_view
from components.gallery_view import CAPTION_LIMIT, StreamlitGalleryDisplay, render_detail, short_caption


class TestShortCaption:
    def test_short_text_is_unchanged(self):
        assert short_caption("A small nebula.") == "A small nebula."

    def test_long_text_is_cut_with_ellipsis(self):
        text = "x" * (CAPTION_LIMIT + 20)
        result = short_caption(text)
        assert result == "x" * CAPTION_LIMIT + "…"

    def test_text_at_limit_has_no_ellipsis(self):
        assert short_caption("y" * CAPTION_LIMIT) == "y" * CAPTION_LIMIT

    @pytest.mark.parametrize("text", ["", None])
    def test_missing_text(self, text):
        assert short_caption(text) == ""


class TestStreamlitGalleryDisplay:
    def test_states_render_into_the_slot(self):
        slot = MagicMock()
        display = StreamlitGalleryDisplay(slot)

        display.show_loading()
        display.show_error("boom")
        display.show_empty()

        assert slot.info.call_args_list == [call("Loading images…"), call("No images found.")]
        slot.error.assert_called_once_with("boom")

    @patch("components.gallery_view.st")
    def test_grid_renders_one_card_per_entry(self, mock_st):
        mock_st.button.return_value = False
        slot = MagicMock()
        entries = [
            {"date": "2024-01-02", "title": "C", "hdurl": "http://x/c-hd.jpg", "url": "http://x/c.jpg"},
            {"date": "2024-01-01", "title": "A", "url": "http://x/a.jpg"},
        ]

        StreamlitGalleryDisplay(slot).show_grid(entries)

        mock_st.columns.assert_called_once_with(gallery_view.GRID_COLUMNS, gap="small")
        assert [c.args[0] for c in mock_st.image.call_args_list] == ["http://x/c-hd.jpg", "http://x/a.jpg"]
        assert [c.kwargs["key"] for c in mock_st.button.call_args_list] == ["open_2024-01-02_0", "open_2024-01-01_1"]


class TestRenderDetail:
    @patch("components.gallery_view.st")
    def test_image_entry_shows_large_image(self, mock_st):
        render_detail({"date": "2024-01-01", "title": "A", "url": "http://x/a.jpg",
                       "hdurl": "http://x/a-hd.jpg", "explanation": "Long text", "media_type": "image"})

        mock_st.subheader.assert_called_once_with("A")
        mock_st.image.assert_called_once_with("http://x/a-hd.jpg", width='stretch')
        mock_st.video.assert_not_called()
        mock_st.write.assert_called_once_with("Long text")

    @patch("components.gallery_view.st")
    def test_video_entry_embeds_player(self, mock_st):
        render_detail({"date": "2024-01-03", "title": "B", "url": "https://youtube.com/embed/x",
                       "media_type": "video"})

        mock_st.video.assert_called_once_with("https://youtube.com/embed/x")
        mock_st.image.assert_not_called()

    @patch("components.gallery_view.st")
    def test_untitled_entry_with_copyright(self, mock_st):
        render_detail({"date": "2024-01-04", "url": "http://x/d.jpg", "copyright": "Jane Doe"})

        mock_st.subheader.assert_called_once_with("Untitled")
        mock_st.caption.assert_any_call("© Jane Doe")

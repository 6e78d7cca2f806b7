"""Tests for image persistence."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from elpais_pipeline.downloader import image_filename, save_image


def _stream(*chunks):
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.iter_content.return_value = list(chunks)
    return resp


class TestImageFilename:
    def test_strips_query_and_sanitises(self) -> None:
        assert image_filename("https://img.elpais.com/a/b/foto portada.jpg?auth=x&w=1") == "foto_portada.jpg"

    def test_empty_segment(self) -> None:
        assert image_filename("https://img.elpais.com/") == "image"

    @pytest.mark.parametrize("url", ["https://x/a/..", "https://x/a/.", "https://x/a/..?w=1"])
    def test_dot_only_segment(self, url) -> None:
        assert image_filename(url) == "image"


class TestSaveImage:
    def test_blank_url(self, tmp_path) -> None:
        with patch("elpais_pipeline.downloader.requests.get") as get:
            assert save_image(None, tmp_path) is None
            assert save_image("   ", tmp_path) is None
        get.assert_not_called()

    def test_downloads_into_new_directory(self, tmp_path) -> None:
        dest = tmp_path / "run" / "images"
        with patch("elpais_pipeline.downloader.requests.get", return_value=_stream(b"ab", b"cd")) as get:
            path = save_image("https://img.elpais.com/x/cover.jpg?w=640", dest)

        assert path == str(dest / "cover.jpg")
        assert (dest / "cover.jpg").read_bytes() == b"abcd"
        assert get.call_args.kwargs["stream"] is True

    def test_existing_file_is_not_fetched_again(self, tmp_path) -> None:
        (tmp_path / "cover.jpg").write_bytes(b"old")
        with patch("elpais_pipeline.downloader.requests.get") as get:
            path = save_image("https://img.elpais.com/x/cover.jpg", tmp_path)
        assert path == str(tmp_path / "cover.jpg")
        assert (tmp_path / "cover.jpg").read_bytes() == b"old"
        get.assert_not_called()

    def test_http_failure_returns_none(self, tmp_path) -> None:
        resp = _stream()
        resp.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        with patch("elpais_pipeline.downloader.requests.get", return_value=resp):
            assert save_image("https://img.elpais.com/x/missing.jpg", tmp_path) is None
        assert not (tmp_path / "missing.jpg").exists()

    def test_network_failure_returns_none(self, tmp_path) -> None:
        with patch(
            "elpais_pipeline.downloader.requests.get",
            side_effect=requests.ConnectionError("unreachable"),
        ):
            assert save_image("https://img.elpais.com/x/cover.jpg", tmp_path) is None

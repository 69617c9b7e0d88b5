"""Tests for station.providers — source URL handling."""

from station.providers import _to_qurl


class TestToQUrl:
    def test_existing_file_becomes_local_url(self, tmp_path) -> None:
        f = tmp_path / "rain.mp3"
        f.write_bytes(b"")
        url = _to_qurl(str(f))
        assert url.isLocalFile()
        assert url.toLocalFile() == str(f)

    def test_remote_url_kept(self) -> None:
        url = _to_qurl("https://cdn.test/a.mp3")
        assert not url.isLocalFile()
        assert url.toString() == "https://cdn.test/a.mp3"

    def test_empty(self) -> None:
        assert _to_qurl("").isEmpty()

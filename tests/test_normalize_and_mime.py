"""
Unit tests for the pure helpers: code-fence stripping and MIME type resolution
"""
import pytest

from app.services.diagnosis import resolve_mime_type, strip_code_fences


class TestStripCodeFences:

    def test_json_fence(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_json_fence_is_case_insensitive(self):
        assert strip_code_fences('```JSON\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_no_fence(self):
        assert strip_code_fences('  {"a": 1}\n') == '{"a": 1}'

    def test_leading_fence_only(self):
        assert strip_code_fences('```json {"a": 1}') == '{"a": 1}'

    def test_trailing_fence_only(self):
        assert strip_code_fences('{"a": 1}\n```') == '{"a": 1}'

    def test_fence_inside_text_is_kept(self):
        text = '{"a": "use ``` carefully"}'
        assert strip_code_fences(text) == text

    @pytest.mark.parametrize("raw", ["", "   ", "```json\n```", "```\n\n```", None])
    def test_empty_results(self, raw):
        assert strip_code_fences(raw) == ""


class TestResolveMimeType:

    def test_declared_image_type_is_trusted(self):
        assert resolve_mime_type("image/webp", "photo.bin") == "image/webp"

    def test_octet_stream_png_is_inferred(self):
        assert resolve_mime_type("application/octet-stream", "leaf.png") == "image/png"

    @pytest.mark.parametrize("filename,expected", [
        ("leaf.jpg", "image/jpeg"),
        ("LEAF.JPEG", "image/jpeg"),
        ("my.plant.Png", "image/png"),
        ("anim.gif", "image/gif"),
    ])
    def test_extension_lookup(self, filename, expected):
        assert resolve_mime_type("application/octet-stream", filename) == expected

    @pytest.mark.parametrize("declared,filename", [
        ("application/pdf", "report.pdf"),
        ("text/plain", "notes"),
        ("", "leaf.bmp"),
        (None, None),
        ("application/octet-stream", "png"),
    ])
    def test_unresolvable(self, declared, filename):
        assert resolve_mime_type(declared, filename) is None

"""PDF文本提取测试."""

from unittest.mock import MagicMock, patch

import fitz
import pytest

from gongwen.errors import ExtractionError, InputRejectedError
from gongwen.service.source_extractor import PaperIdeaService, SourceExtractor


def make_pdf(*lines: str) -> bytes:
    """生成包含指定文本的PDF."""
    doc = fitz.open()
    page = doc.new_page()
    for index, line in enumerate(lines):
        page.insert_text((72, 72 + index * 20), line)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def extractor():
    """PDF提取器实例."""
    return SourceExtractor(max_bytes=10 * 1024 * 1024, max_chars=12000)


def test_extract_collapses_whitespace(extractor):
    """测试空白折叠为单个空格."""
    text = extractor.extract_bytes(make_pdf("Digital   transformation", "green innovation"))
    assert text.startswith("Digital transformation")
    assert "green innovation" in text
    assert "\n" not in text
    assert "  " not in text


def test_extract_truncates(extractor):
    """测试提取文本截断."""
    extractor.max_chars = 10
    text = extractor.extract_bytes(make_pdf("Digital transformation and green innovation"))
    assert len(text) == 10


def test_reject_non_pdf(extractor):
    """测试非PDF文件被拒绝."""
    with pytest.raises(InputRejectedError, match="仅支持 PDF 文件"):
        extractor.extract_bytes(b"plain text", "notes.txt")


def test_reject_oversized_pdf():
    """测试超过大小上限的PDF被拒绝."""
    small = SourceExtractor(max_bytes=1024 * 1024, max_chars=100)
    with pytest.raises(InputRejectedError, match="PDF 文件过大"):
        small.extract_bytes(b"%PDF-" + b"0" * (1024 * 1024))


def test_reject_pdf_without_text(extractor):
    """测试未提取到文本的PDF被拒绝."""
    with pytest.raises(InputRejectedError, match="PDF 未提取到有效文本"):
        extractor.extract_bytes(make_pdf())


@patch("gongwen.service.source_extractor.fitz.open")
def test_parse_failure(mock_open, extractor):
    """测试PDF解析失败转换为提取错误."""
    mock_open.side_effect = RuntimeError("cannot open broken document")
    with pytest.raises(ExtractionError):
        extractor.extract_bytes(b"%PDF-1.4 broken")


def test_extract_file(extractor, tmp_path):
    pdf_path = tmp_path / "paper.pdf"
    pdf_path.write_bytes(make_pdf("Green innovation"))
    assert extractor.extract_file(pdf_path) == "Green innovation"
    with pytest.raises(FileNotFoundError):
        extractor.extract_file(tmp_path / "missing.pdf")


def test_generate_idea(extractor):
    """测试提取文本后生成研究思路."""
    generation_service = MagicMock()
    generation_service.research_idea.return_value = "研究思路"
    service = PaperIdeaService(extractor=extractor, generation_service=generation_service)

    assert service.generate_idea(make_pdf("Green innovation"), "paper.pdf") == "研究思路"
    generation_service.research_idea.assert_called_once_with("Green innovation")


def test_generate_idea_skips_generation_on_rejection(extractor):
    generation_service = MagicMock()
    service = PaperIdeaService(extractor=extractor, generation_service=generation_service)
    with pytest.raises(InputRejectedError):
        service.generate_idea(b"not a pdf", "paper.doc")
    generation_service.research_idea.assert_not_called()

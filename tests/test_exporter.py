"""导出测试."""

from io import BytesIO

import pytest
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from gongwen.data.document_io import DocumentIO
from gongwen.data.markup_tagger import build_markup
from gongwen.data.models import WritingMode
from gongwen.errors import InputRejectedError
from gongwen.service.exporter import ExportFormat, ExportOrchestrator


@pytest.fixture
def exporter():
    """导出编排器实例."""
    return ExportOrchestrator()


def test_export_docx(exporter, complete_gov_text, tmp_path):
    """测试无问题时直接导出Word文档."""
    result = exporter.export(complete_gov_text, ExportFormat.DOCX, output_dir=tmp_path)

    assert result.pending is False
    assert result.issues == []
    assert result.report_path is None
    assert result.output_path == tmp_path / "关于召开年度总结会议的通知.docx"
    doc = Document(BytesIO(result.output_path.read_bytes()))
    assert doc.paragraphs[2].text == "关于召开年度总结会议的通知"
    assert [path.name for path in tmp_path.iterdir()] == ["关于召开年度总结会议的通知.docx"]


def test_export_markup(exporter, complete_gov_text, tmp_path):
    """测试导出标记文本."""
    result = exporter.export(complete_gov_text, ExportFormat.MARKUP, output_dir=tmp_path)
    assert result.output_path.suffix == ".md"
    assert result.output_path.read_text(encoding="utf-8") == build_markup(complete_gov_text)


def test_export_waits_for_confirmation(exporter, tmp_path):
    """测试预检有问题时不写文件."""
    result = exporter.export("随便写点内容", ExportFormat.DOCX, output_dir=tmp_path)
    assert result.pending is True
    assert len(result.issues) == 4
    assert result.output_path is None
    assert list(tmp_path.iterdir()) == []


def test_forced_export_writes_report(exporter, tmp_path):
    """测试确认后继续导出并生成预检报告."""
    result = exporter.export("随便写点内容", ExportFormat.DOCX, output_dir=tmp_path, force=True)

    assert result.pending is False
    assert result.output_path == tmp_path / "随便写点内容.docx"
    assert result.report_path == tmp_path / "随便写点内容_预检报告.md"
    report = result.report_path.read_text(encoding="utf-8")
    assert "共 4 项问题" in report
    assert "缺失：标题" in report


def test_paper_mode_export(exporter, tmp_path):
    text = "摘要\n" + "经" * 400
    result = exporter.export(text, ExportFormat.DOCX, mode=WritingMode.PAPER,
                             selected_sections=["abstract"], output_dir=tmp_path)
    assert result.pending is False
    assert result.output_path.exists()


def test_export_empty_content(exporter, tmp_path):
    with pytest.raises(InputRejectedError):
        exporter.export("  \n", ExportFormat.DOCX, output_dir=tmp_path)


def test_docx_content_is_normalized(exporter):
    """测试Word导出前去除Markdown加粗."""
    data = exporter.serialize("关于放假的**通知**\n正文", ExportFormat.DOCX)
    doc = Document(BytesIO(data))
    assert doc.paragraphs[0].text == "关于放假的通知"


@pytest.mark.parametrize("content,name", [
    ("〔发文字号〕\n关于“A/B”测试的通知\n正文", "关于“AB”测试的通知"),
    ("\n\n第一行:内容*\n第二行", "第一行内容"),
    ("  \n", "公文"),
    ("正文" * 30, "正文" * 20),
])
def test_export_name(content, name):
    """测试导出文件名."""
    assert DocumentIO.export_name(content) == name


def test_save_bytes_leaves_no_temp_file(tmp_path):
    target = tmp_path / "sub" / "out.md"
    DocumentIO.save_bytes(b"data", target)
    DocumentIO.save_bytes(b"new", target)
    assert target.read_bytes() == b"new"
    assert [path.name for path in target.parent.iterdir()] == ["out.md"]


def test_body_line_with_hash_prefix_stays_body(exporter):
    """测试以“# ”开头的正文行在Word中仍按正文排版."""
    text = "关于放假的通知\n各学院：\n# 注意：以下为正文\n正文内容。\n沈阳师范大学\n2024年1月1日"
    doc = Document(BytesIO(exporter.serialize(text, ExportFormat.DOCX)))

    body = doc.paragraphs[2]
    assert body.text == "# 注意：以下为正文"
    assert body.alignment == WD_ALIGN_PARAGRAPH.LEFT
    assert body.runs[0].font.size == Pt(16)
    titles = [paragraph for paragraph in doc.paragraphs if paragraph.runs and paragraph.runs[0].font.size == Pt(22)]
    assert [paragraph.text for paragraph in titles] == ["关于放假的通知"]

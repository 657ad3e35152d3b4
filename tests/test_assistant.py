"""写作助手测试."""

from unittest.mock import MagicMock

import pytest

from gongwen.app.assistant import WritingAssistant
from gongwen.data.history import SessionManager
from gongwen.data.models import PreflightIssue, WritingMode
from gongwen.data.placeholder_normalizer import DATE_PLACEHOLDER
from gongwen.data.template_store import TemplateStore
from gongwen.errors import GenerationError
from gongwen.service.exporter import ExportFormat
from gongwen.service.generation_service import GenerationService, PaperPromptRequest, build_gov_prompt

GENERATED = "**关于放假的通知**\r\n各学院：\r\n正文。\r\n沈阳师范大学\r\n2024年5月10日  \n"


@pytest.fixture
def mock_generation_service():
    """模拟文本生成服务."""
    service = MagicMock(spec=GenerationService)
    service.generate.return_value = GENERATED
    return service


@pytest.fixture
def assistant(mock_generation_service, tmp_path, ticking_clock):
    """写作助手实例."""
    return WritingAssistant(
        generation_service=mock_generation_service,
        template_store=TemplateStore(tmp_path / "templates.yaml"),
        sessions=SessionManager(clock=ticking_clock),
    )


def test_generate_document(assistant, mock_generation_service):
    """测试生成公文：规范化、日期占位并记录版本."""
    result = assistant.generate_document("notice", "写放假通知")

    assert result.success is True
    assert result.content == f"关于放假的通知\n各学院：\n正文。\n沈阳师范大学\n{DATE_PLACEHOLDER}"
    assert assistant.content == result.content
    assert result.version.label == "版本 1"
    assert assistant.missing_elements() == []

    request = mock_generation_service.generate.call_args.args[0]
    assert request.type == "notice"
    assert request.prompt == build_gov_prompt("general-office", "写放假通知")


def test_generate_keeps_date_given_in_prompt(assistant):
    result = assistant.generate_document("notice", "成文日期2024年5月10日")
    assert result.content.endswith("2024年5月10日")


def test_generate_requires_document_type(assistant, mock_generation_service):
    """测试未选择文种时不调用生成服务."""
    result = assistant.generate_document("", "写通知")
    assert result.success is False
    assert result.message == "请选择文种"
    mock_generation_service.generate.assert_not_called()


def test_incomplete_custom_template_blocks_generation(assistant, mock_generation_service):
    """测试自定义模板不完整时阻止生成."""
    result = assistant.generate_document("notice", "写通知", template_id="custom", custom_template="语气正式")
    assert result.success is False
    assert result.message == "模板要求缺少：主送要求、落款要求、成文日期要求"
    mock_generation_service.generate.assert_not_called()


def test_saved_custom_template_is_used(assistant, mock_generation_service):
    """测试使用已保存的自定义模板."""
    assistant.save_custom_template("主送各学院，落款某学院，注明成文日期", WritingMode.GOV)
    result = assistant.generate_document("notice", "写通知", template_id="custom")
    assert result.success is True
    request = mock_generation_service.generate.call_args.args[0]
    assert request.prompt.startswith("主送各学院")


def test_generation_failure_keeps_content(assistant, mock_generation_service):
    """测试生成失败时文档文本不变."""
    assistant.edit("已有内容")
    mock_generation_service.generate.side_effect = GenerationError("生成文档时发生错误：超时")

    result = assistant.generate_document("notice", "写通知")
    assert result.success is False
    assert result.report == "处理失败: 生成文档时发生错误：超时"
    assert assistant.content == "已有内容"
    assert assistant.versions() == []


def test_generate_paper(assistant, mock_generation_service):
    mock_generation_service.generate.return_value = "摘要\n**正文**"
    result = assistant.generate_paper(PaperPromptRequest(sections=["abstract"]))
    assert result.success is True
    assert assistant.mode == WritingMode.PAPER
    assert assistant.content == "摘要\n正文"
    assert mock_generation_service.generate.call_args.args[0].type == "paper"


def test_selection_edit(assistant, mock_generation_service):
    """测试选区改写只替换选中文本."""
    assistant.edit("关于放假的通知\n请大家注意安全。")
    mock_generation_service.rewrite.return_value = "**请全体师生注意安全。**"
    start = assistant.content.index("请")

    result = assistant.apply_selection_edit(start, len(assistant.content), "更正式", "notice")

    assert result.success is True
    assert assistant.content == "关于放假的通知\n请全体师生注意安全。"
    mock_generation_service.rewrite.assert_called_once_with("请大家注意安全。", "更正式", "notice")
    assert assistant.undo() == "关于放假的通知\n请大家注意安全。"


def test_selection_edit_rejects_empty_input(assistant, mock_generation_service):
    """测试空选区或空指令被拒绝."""
    assistant.edit("关于放假的通知")
    assert assistant.apply_selection_edit(3, 3, "更正式").message == "请先选中需要修改的文本"
    assert assistant.apply_selection_edit(0, 3, "  ").message == "请输入修改要求"
    mock_generation_service.rewrite.assert_not_called()


def test_versions_and_undo(assistant, mock_generation_service):
    """测试版本回看与撤销."""
    first = assistant.generate_document("notice", "写通知").version
    mock_generation_service.generate.return_value = "关于开学的通知"
    assistant.generate_document("notice", "写通知")

    assert [version.label for version in assistant.versions()] == ["版本 2", "版本 1"]
    assert assistant.view_version(first.id).success is True
    assert assistant.content == first.content
    assert assistant.undo() == "关于开学的通知"
    assert assistant.redo() == first.content
    assert assistant.view_version("missing").success is False


def test_modes_are_isolated(assistant):
    assistant.edit("公文内容")
    assert assistant.switch_mode(WritingMode.PAPER) == ""
    assistant.edit("论文内容")
    assert assistant.missing_elements() == []
    assert assistant.switch_mode(WritingMode.GOV) == "公文内容"


def test_jump_to_is_clamped(assistant):
    assistant.edit("短文本")
    assert assistant.jump_to(PreflightIssue("x", "x", 100)) == 3
    assert assistant.jump_to(PreflightIssue("x", "x", -5)) == 0
    assert assistant.jump_to(PreflightIssue("x", "x", 1)) == 1


def test_export_flow(assistant, tmp_path):
    """测试预检有问题时先返回待确认，确认后继续导出."""
    assistant.edit("随便写点内容")
    pending = assistant.export(ExportFormat.MARKUP, output_dir=tmp_path)
    assert pending.success is True
    assert pending.pending is True
    assert pending.report.startswith("预检发现 4 项问题")
    assert list(tmp_path.iterdir()) == []

    result = assistant.continue_export(ExportFormat.MARKUP, output_dir=tmp_path)
    assert result.success is True
    assert result.output_path.exists()
    assert result.report_path.exists()
    assert "预检报告" in result.report


def test_export_empty_document(assistant, tmp_path):
    result = assistant.export(output_dir=tmp_path)
    assert result.success is False

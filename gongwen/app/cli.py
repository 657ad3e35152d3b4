"""命令行接口."""

from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger

from gongwen.app.assistant import ActionResult, WritingAssistant
from gongwen.data.document_io import DocumentIO
from gongwen.data.markup_tagger import build_markup
from gongwen.data.models import WritingMode
from gongwen.data.preflight import build_preflight_items
from gongwen.data.template_store import TemplateStore
from gongwen.data.templates import ALL_SECTION_KEYS, GOV_TEMPLATES, PAPER_TEMPLATES
from gongwen.errors import GongwenError
from gongwen.service.exporter import ExportFormat
from gongwen.service.generation_service import PaperPromptRequest
from gongwen.service.source_extractor import PaperIdeaService
from gongwen.utils.logger import setup_logger

app = typer.Typer(help="公文与论文写作助手")
template_app = typer.Typer(help="自定义模板管理")
app.add_typer(template_app, name="template")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志")) -> None:
    """公文与论文写作助手."""
    if verbose:
        setup_logger("DEBUG")


def _echo_result(result: ActionResult) -> None:
    if result.success:
        typer.echo(typer.style(result.report, fg=typer.colors.GREEN))
    else:
        typer.echo(typer.style(result.report, fg=typer.colors.RED))
        raise typer.Exit(code=1)


def _fail(message: str) -> None:
    typer.echo(typer.style(f"处理失败: {message}", fg=typer.colors.RED))
    raise typer.Exit(code=1)


def _load(path: Path) -> str:
    try:
        return DocumentIO.load_text(path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _parse_fields(values: List[str]) -> dict:
    fields = {}
    for value in values:
        key, sep, text = value.partition("=")
        if not sep or key not in ALL_SECTION_KEYS:
            _fail(f"章节材料格式应为 key=内容，key 取值: {', '.join(ALL_SECTION_KEYS)}")
        fields[key] = text
    return fields


def _export(assistant: WritingAssistant, fmt: ExportFormat, output_dir: Optional[Path],
            sections: Optional[List[str]], strict: Optional[bool], force: bool) -> None:
    result = assistant.export(fmt, selected_sections=sections, strict=strict, output_dir=output_dir, force=force)
    if result.pending:
        typer.echo(typer.style(result.report, fg=typer.colors.YELLOW))
        if not typer.confirm("仍要继续导出吗？", default=False):
            raise typer.Exit(code=1)
        result = assistant.continue_export(fmt, selected_sections=sections, strict=strict, output_dir=output_dir)
    _echo_result(result)


@app.command()
def generate(
    doc_type: str = typer.Argument(..., help="文种：notice/report/request/summary"),
    prompt: str = typer.Argument(..., help="写作要求"),
    template: str = typer.Option(GOV_TEMPLATES[0].id, help="公文模板id"),
    custom_template: Optional[Path] = typer.Option(None, help="自定义模板文件，默认读取已保存模板"),
    output: Optional[Path] = typer.Option(None, help="生成文本保存路径，默认打印"),
) -> None:
    """生成公文."""
    assistant = WritingAssistant()
    custom = _load(custom_template) if custom_template else None
    result = assistant.generate_document(doc_type, prompt, template, custom)
    if result.success and output:
        DocumentIO.save_bytes(result.content.encode("utf-8"), output)
    elif result.success:
        typer.echo(result.content)
    missing = assistant.missing_elements()
    if result.success and missing:
        typer.echo(typer.style(f"缺失要素：{'、'.join(missing)}", fg=typer.colors.YELLOW))
    _echo_result(result)


@app.command()
def paper(
    draft: Optional[Path] = typer.Option(None, help="原始草稿材料文件"),
    field: List[str] = typer.Option([], help="章节材料，格式 key=内容，可多次指定"),
    section: List[str] = typer.Option([], help="选中的章节key，默认全部"),
    template: str = typer.Option(PAPER_TEMPLATES[0].id, help="论文风格模板id"),
    extra: str = typer.Option("", help="额外写作要求"),
    output: Optional[Path] = typer.Option(None, help="生成文本保存路径，默认打印"),
) -> None:
    """生成论文草稿."""
    request = PaperPromptRequest(
        template_id=template,
        fields=_parse_fields(field),
        sections=section or None,
        draft=_load(draft) if draft else "",
        extra=extra,
    )
    result = WritingAssistant().generate_paper(request)
    if result.success and output:
        DocumentIO.save_bytes(result.content.encode("utf-8"), output)
    elif result.success:
        typer.echo(result.content)
    _echo_result(result)


@app.command()
def rewrite(
    input_path: Path = typer.Argument(..., help="文档文本文件"),
    start: int = typer.Option(..., help="选区起点"),
    end: int = typer.Option(..., help="选区终点"),
    instruction: str = typer.Option(..., help="修改要求"),
    mode: WritingMode = typer.Option(WritingMode.GOV, help="写作模式"),
    doc_type: str = typer.Option("notice", help="文种id"),
) -> None:
    """改写文档中的选区，结果写回原文件."""
    assistant = WritingAssistant()
    assistant.switch_mode(mode)
    assistant.edit(_load(input_path))
    result = assistant.apply_selection_edit(start, end, instruction, doc_type)
    if result.success:
        DocumentIO.save_bytes(result.content.encode("utf-8"), input_path)
    _echo_result(result)


@app.command()
def tag(input_path: Path = typer.Argument(..., help="文档文本文件")) -> None:
    """输出标记文本."""
    typer.echo(build_markup(_load(input_path)))


@app.command()
def preflight(
    input_path: Path = typer.Argument(..., help="文档文本文件"),
    mode: WritingMode = typer.Option(WritingMode.GOV, help="写作模式"),
    section: List[str] = typer.Option([], help="论文模式下选中的章节key"),
) -> None:
    """导出前预检."""
    issues = build_preflight_items(_load(input_path), mode, section or None)
    if not issues:
        typer.echo(typer.style("预检通过", fg=typer.colors.GREEN))
        return
    for issue in issues:
        typer.echo(typer.style(f"[{issue.position}] {issue.label}", fg=typer.colors.YELLOW))
    raise typer.Exit(code=1)


@app.command()
def export(
    input_path: Path = typer.Argument(..., help="文档文本文件"),
    fmt: ExportFormat = typer.Option(ExportFormat.DOCX, "--format", help="导出格式：md/docx"),
    mode: WritingMode = typer.Option(WritingMode.GOV, help="写作模式"),
    section: List[str] = typer.Option([], help="论文模式下选中的章节key"),
    output_dir: Optional[Path] = typer.Option(None, help="输出目录"),
    strict: Optional[bool] = typer.Option(None, "--strict/--no-strict", help="奇偶页页码"),
    force: bool = typer.Option(False, "--force", help="预检有问题时直接导出"),
) -> None:
    """导出标记文本或Word文档."""
    assistant = WritingAssistant()
    assistant.switch_mode(mode)
    assistant.edit(_load(input_path))
    _export(assistant, fmt, output_dir, section or None, strict, force)


@app.command("paper-idea")
def paper_idea(
    pdf_path: Path = typer.Argument(..., help="论文PDF文件"),
    output: Optional[Path] = typer.Option(None, help="研究思路保存路径，默认打印"),
) -> None:
    """根据论文PDF生成研究思路."""
    try:
        idea = PaperIdeaService().generate_idea_from_file(pdf_path)
    except (GongwenError, FileNotFoundError) as e:
        logger.error(f"生成研究思路失败: {e}")
        _fail(str(e))
    if output:
        DocumentIO.save_bytes(idea.encode("utf-8"), output)
        typer.echo(typer.style(f"研究思路已保存: {output}", fg=typer.colors.GREEN))
    else:
        typer.echo(idea)


@template_app.command("save")
def template_save(
    mode: WritingMode = typer.Argument(..., help="写作模式：gov/paper"),
    template_path: Path = typer.Argument(..., help="模板文本文件"),
) -> None:
    """保存自定义模板."""
    TemplateStore().save(mode, _load(template_path))
    typer.echo(typer.style("模板已保存", fg=typer.colors.GREEN))


@template_app.command("show")
def template_show(mode: WritingMode = typer.Argument(..., help="写作模式：gov/paper")) -> None:
    """显示已保存的自定义模板."""
    text = TemplateStore().load(mode)
    if not text:
        _fail("尚未保存自定义模板")
    typer.echo(text)


if __name__ == "__main__":
    app()

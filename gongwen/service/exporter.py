"""导出编排：预检 → 用户确认 → 渲染 → 写文件."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from gongwen.config.settings import settings
from gongwen.data.document_io import DocumentIO
from gongwen.data.document_renderer import DocumentRenderer
from gongwen.data.markup_tagger import build_markup, tag_text
from gongwen.data.models import PreflightIssue, WritingMode
from gongwen.data.placeholder_normalizer import normalize_content
from gongwen.data.preflight import build_preflight_items
from gongwen.data.report_generator import ReportGenerator
from gongwen.errors import InputRejectedError


class ExportFormat(str, Enum):
    """导出格式."""

    MARKUP = "md"  # 标记文本
    DOCX = "docx"  # Word文档


@dataclass
class ExportResult:
    """导出结果.

    Attributes:
        pending: 预检发现问题且未确认继续，尚未写出文件
        issues: 预检问题列表
        output_path: 导出文件路径
        report_path: 预检报告路径（带问题继续导出时生成）
    """

    issues: List[PreflightIssue] = field(default_factory=list)
    output_path: Optional[Path] = None
    report_path: Optional[Path] = None
    pending: bool = False


class ExportOrchestrator:
    """导出编排器."""

    def __init__(self, renderer: DocumentRenderer = None, report_generator: ReportGenerator = None):
        self.renderer = renderer or DocumentRenderer()
        self.report_generator = report_generator or ReportGenerator()

    def serialize(self, content: str, fmt: ExportFormat, strict: bool = True) -> bytes:
        """把文档文本序列化为导出内容."""
        if fmt == ExportFormat.DOCX:
            return self.renderer.render_tagged_bytes(tag_text(normalize_content(content)), strict=strict)
        return build_markup(content).encode("utf-8")

    def export(
        self,
        content: str,
        fmt: ExportFormat = ExportFormat.DOCX,
        mode: WritingMode = WritingMode.GOV,
        selected_sections: Optional[List[str]] = None,
        strict: Optional[bool] = None,
        output_dir: Optional[Union[str, Path]] = None,
        force: bool = False,
    ) -> ExportResult:
        """导出文档.

        预检发现问题时，除非 force 为真，否则只返回问题列表而不写文件。

        Args:
            content: 文档文本
            fmt: 导出格式
            mode: 写作模式，决定预检规则
            selected_sections: 论文模式下选中的章节key
            strict: 是否启用奇偶页页码，None时使用配置
            output_dir: 输出目录，None时使用配置
            force: 预检有问题时是否继续导出

        Returns:
            导出结果

        Raises:
            InputRejectedError: 文档为空
            ValueError: 写文件失败
        """
        if not content.strip():
            raise InputRejectedError("文档内容为空，无法导出")

        issues = build_preflight_items(content, mode, selected_sections)
        if issues and not force:
            logger.info(f"预检发现 {len(issues)} 项问题，等待确认后继续导出")
            return ExportResult(issues=issues, pending=True)

        strict = settings.document.strict_layout if strict is None else strict
        output_dir = Path(output_dir) if output_dir else settings.output_dir
        stem = DocumentIO.export_name(content)

        output_path = DocumentIO.save_bytes(
            self.serialize(content, fmt, strict),
            output_dir / f"{stem}.{fmt.value}",
        )

        report_path = None
        if issues:
            report_path = output_dir / f"{stem}_预检报告.md"
            self.report_generator.generate_report(issues, content, report_path)

        logger.info(f"导出完成: {output_path}")
        return ExportResult(issues=issues, output_path=output_path, report_path=report_path)

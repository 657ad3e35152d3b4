"""写作助手：会话、生成、改写、预检与导出的统一入口."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from gongwen.data.history import SessionManager
from gongwen.data.models import PreflightIssue, VersionEntry, WritingMode
from gongwen.data.placeholder_normalizer import apply_date_placeholders, normalize_content
from gongwen.data.preflight import build_preflight_items, missing_elements
from gongwen.data.templates import (
    CUSTOM_TEMPLATE_ID,
    DOCUMENT_TYPES,
    GOV_TEMPLATES,
    check_template_completeness,
    find_template,
)
from gongwen.data.template_store import TemplateStore
from gongwen.errors import GongwenError, InputRejectedError, TemplateIncompleteError
from gongwen.service.exporter import ExportFormat, ExportOrchestrator
from gongwen.service.generation_service import (
    GenerationRequest,
    GenerationService,
    PaperPromptRequest,
    build_gov_prompt,
    build_paper_prompt,
)


@dataclass
class ActionResult:
    """操作结果."""

    success: bool
    message: str = ""
    content: str = ""
    version: Optional[VersionEntry] = None
    issues: List[PreflightIssue] = field(default_factory=list)
    output_path: Optional[Path] = None
    report_path: Optional[Path] = None
    pending: bool = False

    @property
    def report(self) -> str:
        """生成结果报告.

        Returns:
            结果报告字符串
        """
        if not self.success:
            return f"处理失败: {self.message}"
        if self.pending:
            lines = [f"预检发现 {len(self.issues)} 项问题，确认后可继续导出："]
            lines.extend(f"- {issue.label}" for issue in self.issues)
            return "\n".join(lines)
        if self.output_path:
            report = f"导出成功!\n- 输出文件: {self.output_path}"
            if self.report_path:
                report += f"\n- 预检报告: {self.report_path}"
            return report
        return self.message or "处理成功!"


class WritingAssistant:
    """写作助手."""

    def __init__(
        self,
        generation_service: GenerationService = None,
        template_store: TemplateStore = None,
        exporter: ExportOrchestrator = None,
        sessions: SessionManager = None,
    ) -> None:
        self.generation_service = generation_service or GenerationService()
        self.template_store = template_store or TemplateStore()
        self.exporter = exporter or ExportOrchestrator()
        self.sessions = sessions or SessionManager()
        logger.info("写作助手已初始化")

    @property
    def mode(self) -> WritingMode:
        return self.sessions.mode

    @property
    def content(self) -> str:
        return self.sessions.active.content

    def switch_mode(self, mode: WritingMode) -> str:
        """切换写作模式，返回该模式下的当前文本."""
        return self.sessions.switch(mode).content

    def _failure(self, error: GongwenError) -> ActionResult:
        logger.warning(f"操作失败: {error}")
        return ActionResult(success=False, message=str(error), content=self.content)

    def generate_document(
        self,
        doc_type: str,
        user_prompt: str,
        template_id: str = GOV_TEMPLATES[0].id,
        custom_template: Optional[str] = None,
    ) -> ActionResult:
        """生成公文.

        Args:
            doc_type: 文种id
            user_prompt: 写作要求
            template_id: 公文模板id
            custom_template: 自定义模板文本，None时读取已保存的模板

        Returns:
            操作结果；失败时文档文本保持不变
        """
        session = self.sessions.switch(WritingMode.GOV)
        try:
            if doc_type not in DOCUMENT_TYPES:
                raise InputRejectedError("请选择文种")
            if find_template(GOV_TEMPLATES, template_id) is None:
                raise InputRejectedError(f"未知的公文模板: {template_id}")
            if template_id == CUSTOM_TEMPLATE_ID:
                if custom_template is None:
                    custom_template = self.template_store.load(WritingMode.GOV)
                missing = check_template_completeness(custom_template)
                if missing:
                    raise TemplateIncompleteError(missing)

            prompt = build_gov_prompt(template_id, user_prompt, custom_template or "")
            generated = self.generation_service.generate(GenerationRequest(type=doc_type, prompt=prompt))
        except GongwenError as e:
            return self._failure(e)

        text = apply_date_placeholders(normalize_content(generated), user_prompt)
        version = session.commit_generation(text)
        logger.info(f"公文生成完成，已保存为{version.label}")
        return ActionResult(success=True, message=f"已生成{version.label}", content=text, version=version)

    def generate_paper(self, request: PaperPromptRequest) -> ActionResult:
        """生成论文草稿."""
        session = self.sessions.switch(WritingMode.PAPER)
        if request.template_id == CUSTOM_TEMPLATE_ID and not request.custom_template.strip():
            request = request.model_copy(update={"custom_template": self.template_store.load(WritingMode.PAPER)})
        try:
            generated = self.generation_service.generate(
                GenerationRequest(type=WritingMode.PAPER.value, prompt=build_paper_prompt(request))
            )
        except GongwenError as e:
            return self._failure(e)

        text = normalize_content(generated)
        version = session.commit_generation(text)
        logger.info(f"论文草稿生成完成，已保存为{version.label}")
        return ActionResult(success=True, message=f"已生成{version.label}", content=text, version=version)

    def apply_selection_edit(self, start: int, end: int, instruction: str, doc_type: str = "") -> ActionResult:
        """改写选区.

        Args:
            start: 选区起点（字符偏移）
            end: 选区终点（字符偏移）
            instruction: 修改要求
            doc_type: 文种id，论文模式下忽略

        Returns:
            操作结果；替换文本经规范化后写回选区
        """
        session = self.sessions.active
        text = session.content
        start, end = sorted((max(0, min(start, len(text))), max(0, min(end, len(text)))))
        selected = text[start:end]
        try:
            if not selected.strip():
                raise InputRejectedError("请先选中需要修改的文本")
            if not instruction.strip():
                raise InputRejectedError("请输入修改要求")
            request_type = WritingMode.PAPER.value if self.mode == WritingMode.PAPER else (doc_type or "notice")
            replacement = self.generation_service.rewrite(selected, instruction.strip(), request_type)
        except GongwenError as e:
            return self._failure(e)

        updated = text[:start] + normalize_content(replacement) + text[end:]
        session.edit(updated)
        logger.info(f"选区改写完成（{start}-{end}）")
        return ActionResult(success=True, message="已替换选中文本", content=updated)

    def edit(self, text: str) -> List[str]:
        """用户直接编辑，返回公文缺失要素."""
        self.sessions.active.edit(text)
        return self.missing_elements()

    def undo(self) -> str:
        self.sessions.active.undo()
        return self.content

    def redo(self) -> str:
        self.sessions.active.redo()
        return self.content

    def versions(self) -> List[VersionEntry]:
        """当前模式的版本列表，最新在前."""
        return self.sessions.active.versions.latest_first()

    def view_version(self, version_id: str) -> ActionResult:
        content = self.sessions.active.view_version(version_id)
        if content is None:
            return ActionResult(success=False, message=f"版本不存在: {version_id}", content=self.content)
        return ActionResult(success=True, message="已切换到所选版本", content=content)

    def missing_elements(self) -> List[str]:
        if self.mode != WritingMode.GOV:
            return []
        return missing_elements(self.content)

    def preflight(self, selected_sections: Optional[List[str]] = None) -> List[PreflightIssue]:
        return build_preflight_items(self.content, self.mode, selected_sections)

    def jump_to(self, issue: PreflightIssue) -> int:
        """问题位置对应的光标位置，限制在文本范围内."""
        return max(0, min(issue.position, len(self.content)))

    def save_custom_template(self, text: str, mode: Optional[WritingMode] = None) -> None:
        self.template_store.save(mode or self.mode, text)

    def export(
        self,
        fmt: ExportFormat = ExportFormat.DOCX,
        selected_sections: Optional[List[str]] = None,
        strict: Optional[bool] = None,
        output_dir: Optional[Union[str, Path]] = None,
        force: bool = False,
    ) -> ActionResult:
        """导出当前文本；预检有问题时返回待确认结果."""
        try:
            result = self.exporter.export(
                self.content,
                fmt=fmt,
                mode=self.mode,
                selected_sections=selected_sections,
                strict=strict,
                output_dir=output_dir,
                force=force,
            )
        except GongwenError as e:
            return self._failure(e)
        except ValueError as e:
            logger.error(f"导出失败: {e}")
            return ActionResult(success=False, message=str(e), content=self.content)

        return ActionResult(
            success=True,
            content=self.content,
            issues=result.issues,
            output_path=result.output_path,
            report_path=result.report_path,
            pending=result.pending,
        )

    def continue_export(self, fmt: ExportFormat = ExportFormat.DOCX, **kwargs) -> ActionResult:
        """确认预检问题后继续导出."""
        kwargs["force"] = True
        return self.export(fmt, **kwargs)

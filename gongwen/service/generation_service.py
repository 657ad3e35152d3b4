"""文本生成服务."""

from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from gongwen.config.settings import settings
from gongwen.data.models import WritingMode
from gongwen.data.templates import (
    DOCUMENT_TYPES,
    GOV_TEMPLATES,
    PAPER_TARGET_LENGTH,
    PAPER_TEMPLATES,
    find_template,
    selected_specs,
)
from gongwen.errors import GenerationError


class GenerationRequest(BaseModel):
    """生成请求模型."""

    type: str = Field(..., description="文种id（notice/report/request/summary）或 paper")
    prompt: str = Field(..., description="组合后的提示词")


class PaperPromptRequest(BaseModel):
    """论文提示词材料."""

    template_id: str = Field(default=PAPER_TEMPLATES[0].id, description="论文风格模板id")
    custom_template: str = Field(default="", description="自定义论文模板要求")
    fields: Dict[str, str] = Field(default_factory=dict, description="各章节材料，key为章节key")
    sections: Optional[List[str]] = Field(default=None, description="选中的章节key，None为全部")
    draft: str = Field(default="", description="原始草稿材料")
    extra: str = Field(default="", description="额外写作要求")


def _join(parts: List[str], separator: str) -> str:
    return separator.join(part.strip() for part in parts if part and part.strip())


def build_gov_prompt(template_id: str, user_prompt: str, custom_template: str = "") -> str:
    """组合公文提示词：自定义模板、模板前缀、写作提示."""
    template = find_template(GOV_TEMPLATES, template_id)
    is_custom = template is not None and template.is_custom
    prefix = template.prompt_prefix if template else ""
    return _join([custom_template if is_custom else "", prefix, user_prompt], "\n")


def build_paper_prompt(request: PaperPromptRequest) -> str:
    """组合论文提示词.

    依次为：总体要求、输出结构、字数要求、原始草稿、风格前缀、各章节材料、额外要求。
    """
    template = find_template(PAPER_TEMPLATES, request.template_id)
    if template is not None and template.is_custom:
        prefix = request.custom_template
    else:
        prefix = template.prompt_prefix if template else ""

    specs = selected_specs(request.sections)
    materials = "\n\n".join(
        f"{spec.label}：\n{request.fields[spec.key].strip()}"
        for spec in specs
        if request.fields.get(spec.key, "").strip()
    )
    bounds = "；".join(f"{spec.label}{spec.min_length}-{spec.max_length}字" for spec in specs)

    return _join([
        "请根据以下材料生成经济研究风格论文草稿，要求结构完整、表述严谨。",
        f"输出结构（仅限选定部分）：{'、'.join(spec.label for spec in specs)}",
        f"字数要求：{bounds}。总字数目标约{PAPER_TARGET_LENGTH}字。",
        f"原始草稿材料：\n{request.draft.strip()}" if request.draft.strip() else "",
        prefix,
        materials,
        request.extra,
    ], "\n\n")


def build_rewrite_prompt(selected_text: str, instruction: str) -> str:
    """选区改写提示词，只要求返回替换文本."""
    return settings.llm.rewrite_template.format(instruction=instruction, selected_text=selected_text)


class GenerationService:
    """文本生成服务."""

    def __init__(self, llm_client=None):
        """初始化文本生成服务.

        Args:
            llm_client: 大模型客户端，如果为None则自动创建
        """
        if llm_client is None:
            from gongwen.service.llm_client import LLMClient
            self.llm_client = LLMClient()
        else:
            self.llm_client = llm_client

    def system_prompt(self, doc_type: str) -> str:
        return settings.llm.paper_system_prompt if doc_type == WritingMode.PAPER.value else settings.llm.gov_system_prompt

    def generate(self, request: GenerationRequest, **options) -> str:
        """调用大模型生成文本.

        Args:
            request: 生成请求
            **options: 透传给大模型客户端的参数（temperature、max_tokens等）

        Returns:
            生成的文本

        Raises:
            GenerationError: 调用失败或返回为空
        """
        doc_type = DOCUMENT_TYPES.get(request.type)
        user_message = f"文种：{doc_type.name}\n{request.prompt}" if doc_type else request.prompt
        system_message = options.pop("system_message", None) or self.system_prompt(request.type)

        try:
            content = self.llm_client.chat_completion(
                user_message=user_message,
                system_message=system_message,
                **options,
            )
        except Exception as e:
            logger.error(f"生成文档失败: {e}")
            raise GenerationError(f"生成文档时发生错误：{e}", cause=e) from e

        if not content or not content.strip():
            logger.warning("大模型未返回有效内容")
            raise GenerationError("生成文档时发生错误：大模型未返回有效内容")
        logger.info(f"生成完成（{request.type}），共 {len(content)} 字符")
        return content

    def rewrite(self, selected_text: str, instruction: str, doc_type: str) -> str:
        """改写选中文本，返回替换文本."""
        request = GenerationRequest(type=doc_type, prompt=build_rewrite_prompt(selected_text, instruction))
        return self.generate(request)

    def research_idea(self, source_text: str) -> str:
        """基于论文文本生成研究思路."""
        request = GenerationRequest(
            type=WritingMode.PAPER.value,
            prompt=f"请基于以下论文文本撰写研究思路：\n{source_text}",
        )
        return self.generate(
            request,
            system_message=settings.llm.idea_system_prompt,
            temperature=settings.source.idea_temperature,
            max_tokens=settings.source.idea_max_tokens,
        )

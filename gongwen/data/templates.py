"""文种、模板与论文章节目录."""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from gongwen.data.models import SectionSpec


@dataclass(frozen=True)
class TemplateOption:
    """写作模板."""

    id: str
    name: str
    description: str
    prompt_prefix: str = ""

    @property
    def is_custom(self) -> bool:
        return self.id == CUSTOM_TEMPLATE_ID


CUSTOM_TEMPLATE_ID = "custom"

# 公文文种
DOCUMENT_TYPES: Dict[str, TemplateOption] = {
    "notice": TemplateOption("notice", "通知", "用于发布重要事项或要求"),
    "report": TemplateOption("report", "报告", "用于汇报工作或情况"),
    "request": TemplateOption("request", "请示", "用于向上级请求指示或批准"),
    "summary": TemplateOption("summary", "总结", "用于总结工作或活动"),
}

GOV_TEMPLATES: List[TemplateOption] = [
    TemplateOption(
        "general-office", "校办通用模板", "适用于校办与综合协调类公文",
        "模板：校办通用。要求：语气权威、部署清晰，强调“统筹协调、压实责任、时限明确、闭环落实”。",
    ),
    TemplateOption(
        "academic-affairs", "教务处模板", "教学安排、考试管理、教学质量等",
        "模板：教务处。要求：教学环节完整，涉及课程/考试/质量要求要写清楚流程、材料、节点。",
    ),
    TemplateOption(
        "research-office", "科研处模板", "科研项目、成果管理、平台建设等",
        "模板：科研处。要求：突出项目管理要点、申报条件、评审流程、成果归档与绩效要求。",
    ),
    TemplateOption(
        "student-affairs", "学工部模板", "学生管理、思政教育、奖惩评优等",
        "模板：学工部。要求：强调教育引导、过程管理、责任分工与风险防控。",
    ),
    TemplateOption(CUSTOM_TEMPLATE_ID, "自定义模板", "输入学院/部门专用模板要求"),
]

PAPER_TEMPLATES: List[TemplateOption] = [
    TemplateOption(
        "econ-standard", "经济研究标准风格", "注重因果识别、严谨表述与稳健性检验",
        "论文风格：经济研究。要求：学术严谨、逻辑清晰、表述克制，强调识别策略、稳健性与机制分析。",
    ),
    TemplateOption(
        "policy-eval", "政策评估风格", "突出政策背景、识别设计与政策含义",
        "论文风格：政策评估。要求：交代政策背景、样本构造、识别策略与政策含义，避免夸大结论。",
    ),
    TemplateOption(CUSTOM_TEMPLATE_ID, "自定义论文模板", "输入你偏好的论文写作要求"),
]

# 论文章节规格（字数不含空白）
PAPER_SECTION_SPECS: List[SectionSpec] = [
    SectionSpec("title", "题目", 18, 30),
    SectionSpec("abstract", "摘要", 350, 500),
    SectionSpec("keywords", "关键词", 12, 30),
    SectionSpec("introduction", "引言", 3200, 3800),
    SectionSpec("literature", "文献综述", 3600, 4400),
    SectionSpec("variables", "变量选择与数据来源", 3000, 3400),
    SectionSpec("model", "理论模型与研究假设", 2600, 3000),
    SectionSpec("design", "研究设计与识别策略", 4000, 4500),
    SectionSpec("results", "实证结果分析", 6200, 7000),
    SectionSpec("robustness", "拓展分析/稳健性检验", 3200, 3800),
    SectionSpec("conclusion", "结论与政策含义", 2000, 2400),
]
ALL_SECTION_KEYS = [spec.key for spec in PAPER_SECTION_SPECS]
PAPER_TARGET_LENGTH = 30000

SAMPLE_PAPER_FIELDS: Dict[str, str] = {
    "title": "数字化转型、融资约束与企业绿色创新",
    "abstract": "基于2012—2022年中国A股制造业上市公司数据，本文从融资约束视角检验数字化转型对企业绿色创新的影响。采用双向固定效应模型，并结合工具变量与倾向得分匹配进行稳健性检验。结果表明，数字化转型显著促进企业绿色创新，融资约束在其中发挥部分中介作用，政策环境与行业竞争强化这一效应。研究为数字化与绿色转型协同推进提供经验证据。",
    "keywords": "数字化转型；融资约束；绿色创新；双向固定效应；中介效应",
    "introduction": "在“双碳”目标背景下，企业绿色创新成为高质量发展的关键路径。数字化转型通过信息透明与资源配置优化可能提升绿色创新，但其影响机制与边界条件仍需检验。本文从融资约束视角切入，构建理论框架并提供经验证据。",
    "literature": "现有研究关注数字化转型对生产效率与创新的影响，也有文献讨论融资约束对创新的抑制作用，但二者结合的机制研究相对不足。本文补充数字化转型缓解融资约束进而促进绿色创新的证据。",
    "variables": "被解释变量为绿色创新（绿色专利申请数）。核心解释变量为数字化转型指数（基于年报文本与IT投入）。控制变量包括企业规模、资产负债率、盈利能力、成长性与行业竞争度等。",
    "model": "构建数字化转型影响绿色创新的理论路径：数字化提升信息披露与资源配置效率，缓解融资约束，进而提升绿色创新投入与产出。",
    "design": "采用双向固定效应模型进行基准回归，进一步使用工具变量法缓解内生性；通过PSM-DID与替换指标进行稳健性检验。",
    "results": "基准回归显示数字化转型对绿色创新具有显著正向影响。机制检验表明融资约束起部分中介作用。异质性分析发现在高竞争行业和政策支持地区效应更强。",
    "robustness": "使用替代指标、滞后项、剔除极端值与不同样本窗口后结论稳健；安慰剂检验未发现虚假效应。",
    "conclusion": "数字化转型可显著促进企业绿色创新，政策应鼓励数字化投入并完善绿色金融支持体系，以缓解融资约束。",
}

# 自定义模板必备要素：(缺失提示, 识别模式)
TEMPLATE_REQUIREMENTS = [
    ("主送要求", re.compile(r"主送|各单位|各部门|各学院")),
    ("落款要求", re.compile(r"落款|署名|沈阳师范大学|某处室|某学院")),
    ("成文日期要求", re.compile(r"成文日期|日期|YYYY年MM月DD日")),
]


def find_template(options: List[TemplateOption], template_id: str) -> Optional[TemplateOption]:
    return next((item for item in options if item.id == template_id), None)


def selected_specs(keys: Optional[List[str]] = None) -> List[SectionSpec]:
    """按目录顺序返回选中的章节规格，keys 为 None 时全选."""
    if keys is None:
        return list(PAPER_SECTION_SPECS)
    return [spec for spec in PAPER_SECTION_SPECS if spec.key in keys]


def check_template_completeness(value: str) -> List[str]:
    """检查自定义公文模板是否包含主送、落款、成文日期要求.

    Args:
        value: 模板文本

    Returns:
        缺失要素列表，完整时为空
    """
    normalized = (value or "").strip()
    if not normalized:
        return ["请补充模板要求内容"]
    return [label for label, pattern in TEMPLATE_REQUIREMENTS if not pattern.search(normalized)]

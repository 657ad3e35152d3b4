"""项目配置设置."""

from dotenv import load_dotenv
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

# 先加载.env.example（最低优先级），再加载.env（覆盖前者），最后环境变量最高
load_dotenv(dotenv_path=Path(__file__).parent.parent.parent / '.env.example', override=False)
load_dotenv(dotenv_path=Path(__file__).parent.parent.parent / '.env', override=True)


class LLMConfig(BaseModel):
    """大模型配置."""

    model_name: str = Field(default_factory=lambda: os.environ.get("LLM_MODEL_NAME", "deepseek-chat"))  # 使用的大模型名称
    api_key: Optional[str] = Field(default_factory=lambda: os.environ.get("DEEPSEEK_API_KEY"))  # 大模型API密钥
    api_base_url: Optional[str] = Field(default_factory=lambda: os.environ.get("DEEPSEEK_API_BASE", "https://api.deepseek.com/v1"))  # API基础URL
    max_tokens: int = Field(default_factory=lambda: int(os.environ.get("MAX_TOKENS", "4096")))  # 生成的最大token数
    temperature: float = Field(default_factory=lambda: float(os.environ.get("TEMPERATURE", "0.7")))  # 生成多样性（温度）
    timeout: int = Field(default_factory=lambda: int(os.environ.get("TIMEOUT", "120")))  # API请求超时时间（秒）

    # 提示词相关配置
    gov_system_prompt: str = Field(default_factory=lambda: os.environ.get("GOV_SYSTEM_PROMPT", """
你是沈阳师范大学的公文写作助手，熟悉《党政机关公文格式》的要素与版式。
请根据用户给出的文种与写作要求撰写一篇完整公文，按以下顺序逐行输出：
1. 发文字号，单独一行，用〔〕包裹，如〔发文字号〕；
2. 标题，单独一行，包含文种名称；
3. 主送机关，单独一行，以全角冒号“：”结尾；
4. 正文，分段书写，层次标题使用“一、”“二、”等；
5. 附件说明（如有），以“附件：”开头；
6. 落款单位，单独一行；
7. 成文日期，单独一行。

约束：
- 不编造具体数据、人名、文号或日期；不确定之处用〔占位：说明〕标注
- 不使用Markdown，不要加粗、标题符号或代码块
- 只输出公文正文，不解释写作过程
"""))  # 公文生成系统提示词

    paper_system_prompt: str = Field(default_factory=lambda: os.environ.get("PAPER_SYSTEM_PROMPT", """
你是经济研究期刊论文写作助手，擅长中文学术写作。
请严格按照用户指定的结构输出论文草稿：每个部分的名称单独占一行（如“摘要”），下一行开始为该部分正文。

约束：
- 不编造具体数据、样本或政策细节；不足处用〔占位〕标注
- 不使用Markdown，不要加粗、标题符号或代码块
- 只输出论文草稿，不解释写作过程
"""))  # 论文生成系统提示词

    idea_system_prompt: str = Field(default_factory=lambda: os.environ.get("IDEA_SYSTEM_PROMPT", """你是“经济研究期刊论文研究思路生成助手”。
请基于给定论文内容，生成约2000字的研究思路，中文学术写作风格，面向中国情境。

必须覆盖以下要点：
1) 研究问题与背景（中国情境）
2) 核心变量与数据来源（清楚列出变量构造与可获得的数据）
3) 识别策略/研究设计（强调可行的因果识别或稳健性）
4) 机制与故事线（理论机制与现实故事）
5) 创新点与边际贡献（至少2点）

约束：
- 不编造具体数据或政策细节；不足处用〔占位〕标注
- 不使用Markdown，不要列表符号之外的花哨符号
- 输出为一篇连续的研究思路文本，不解释写作过程"""))  # 研究思路系统提示词

    rewrite_template: str = Field(default_factory=lambda: os.environ.get(
        "REWRITE_TEMPLATE",
        "请仅对以下选中文本进行润色/替换，保持原有段落结构与格式，不要输出其他内容。\n修改要求：{instruction}\n\n选中文本：\n{selected_text}",
    ))  # 选区改写提示词模板


class DocumentConfig(BaseModel):
    """文档处理配置."""

    signature_keywords: List[str] = Field(default_factory=lambda: os.environ.get("SIGNATURE_KEYWORDS", "沈阳师范大学,学院,处室").split(","))  # 落款识别关键词
    signature_window: int = Field(default_factory=lambda: int(os.environ.get("SIGNATURE_WINDOW", "6")))  # 落款识别范围（末尾行数）
    history_coalesce_ms: int = Field(default_factory=lambda: int(os.environ.get("HISTORY_COALESCE_MS", "800")))  # 撤销合并时间窗口（毫秒）
    strict_layout: bool = Field(default_factory=lambda: os.environ.get("STRICT_LAYOUT", "true").lower() == "true")  # 默认启用奇偶页页码
    fallback_name: str = Field(default_factory=lambda: os.environ.get("FALLBACK_NAME", "公文"))  # 导出文件兜底名称
    max_name_length: int = Field(default_factory=lambda: int(os.environ.get("MAX_NAME_LENGTH", "40")))  # 导出文件名最大长度


class SourceConfig(BaseModel):
    """源文档（PDF）提取配置."""

    max_pdf_bytes: int = Field(default_factory=lambda: int(os.environ.get("MAX_PDF_BYTES", str(10 * 1024 * 1024))))  # PDF大小上限
    max_chars: int = Field(default_factory=lambda: int(os.environ.get("MAX_SOURCE_CHARS", "12000")))  # 提取文本截断长度
    idea_temperature: float = Field(default_factory=lambda: float(os.environ.get("IDEA_TEMPERATURE", "0.6")))  # 研究思路生成温度
    idea_max_tokens: int = Field(default_factory=lambda: int(os.environ.get("IDEA_MAX_TOKENS", "2400")))  # 研究思路最大token数


class LogConfig(BaseModel):
    """日志配置."""

    level: str = Field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"))  # 日志级别
    # 精简日志格式
    format: str = Field(default_factory=lambda: os.environ.get("LOG_FORMAT", "<level>{level: <8}</level>| - <level>{message}</level>"))
    log_file: Optional[str] = Field(default_factory=lambda: os.environ.get("LOG_FILE", "gongwen.log"))  # 日志文件名
    rotation: str = Field(default_factory=lambda: os.environ.get("LOG_ROTATION", "10 MB"))  # 日志轮转大小
    retention: str = Field(default_factory=lambda: os.environ.get("LOG_RETENTION", "1 week"))  # 日志保留时间


class Settings(BaseModel):
    """项目全局设置."""

    llm: LLMConfig = Field(default_factory=LLMConfig)  # 大模型相关配置
    document: DocumentConfig = Field(default_factory=DocumentConfig)  # 文档处理相关配置
    source: SourceConfig = Field(default_factory=SourceConfig)  # PDF提取相关配置
    log: LogConfig = Field(default_factory=LogConfig)  # 日志相关配置

    # 项目路径配置
    project_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent.parent)  # 项目根目录
    output_dir: Path = Field(default_factory=lambda: Path(os.environ.get("OUTPUT_DIR", str(Path(__file__).parent.parent.parent / "output"))))  # 输出目录
    template_store: Path = Field(default_factory=lambda: Path(os.environ.get("TEMPLATE_STORE", str(Path(__file__).parent.parent.parent / "output" / "custom_templates.yaml"))))  # 自定义模板存储文件


# 单例模式，避免多次实例化
_settings = None
def get_settings():
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

settings = get_settings()

# 确保输出目录存在
settings.output_dir.mkdir(exist_ok=True, parents=True)

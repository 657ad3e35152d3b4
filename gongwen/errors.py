"""异常定义.

- InputRejectedError: 输入不合规（文件过大、非PDF、选区为空等），直接提示用户，不重试
- ServiceError: 外部服务（文本生成、PDF提取）调用失败
- TemplateIncompleteError: 自定义模板缺少必备要素，阻止生成
"""

from typing import List, Optional


class GongwenError(Exception):
    """写作助手异常基类."""


class InputRejectedError(GongwenError, ValueError):
    """输入被拒绝."""


class TemplateIncompleteError(InputRejectedError):
    """自定义模板要素不完整."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"模板要求缺少：{'、'.join(self.missing)}")


class ServiceError(GongwenError, RuntimeError):
    """外部服务调用失败."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class GenerationError(ServiceError):
    """文本生成失败."""


class ExtractionError(ServiceError):
    """PDF文本提取失败."""

"""论文PDF文本提取与研究思路生成."""

import re
from pathlib import Path
from typing import Union

import fitz  # PyMuPDF
from loguru import logger

from gongwen.config.settings import settings
from gongwen.errors import ExtractionError, InputRejectedError

PDF_MAGIC = b"%PDF-"
_WHITESPACE = re.compile(r"\s+")


class SourceExtractor:
    """从PDF中提取纯文本."""

    def __init__(self, max_bytes: int = None, max_chars: int = None):
        self.max_bytes = max_bytes or settings.source.max_pdf_bytes
        self.max_chars = max_chars or settings.source.max_chars

    def validate(self, data: bytes, filename: str = "") -> None:
        """校验文件类型与大小.

        Raises:
            InputRejectedError: 非PDF文件或文件过大
        """
        if not data.startswith(PDF_MAGIC) and not filename.lower().endswith(".pdf"):
            raise InputRejectedError("仅支持 PDF 文件")
        if len(data) > self.max_bytes:
            raise InputRejectedError(f"PDF 文件过大（最大 {self.max_bytes // (1024 * 1024)}MB）")

    def extract_bytes(self, data: bytes, filename: str = "") -> str:
        """提取PDF文本，空白折叠为单个空格并截断.

        Args:
            data: PDF文件内容
            filename: 原始文件名，用于类型判断

        Returns:
            提取的文本

        Raises:
            InputRejectedError: 输入不合规或未提取到文本
            ExtractionError: PDF解析失败
        """
        self.validate(data, filename)

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            logger.error(f"打开PDF失败: {e}")
            raise ExtractionError("PDF 解析失败", cause=e) from e

        try:
            raw = " ".join(page.get_text("text") for page in doc)
        except Exception as e:
            logger.error(f"提取PDF文本失败: {e}")
            raise ExtractionError("PDF 解析失败", cause=e) from e
        finally:
            doc.close()

        text = _WHITESPACE.sub(" ", raw).strip()[:self.max_chars]
        if not text:
            raise InputRejectedError("PDF 未提取到有效文本")
        logger.info(f"已提取PDF文本 {len(text)} 字符")
        return text

    def extract_file(self, file_path: Union[str, Path]) -> str:
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"文件不存在: {file_path}")
        return self.extract_bytes(file_path.read_bytes(), file_path.name)


class PaperIdeaService:
    """上传论文PDF，生成研究思路."""

    def __init__(self, extractor: SourceExtractor = None, generation_service=None):
        self.extractor = extractor or SourceExtractor()
        if generation_service is None:
            from gongwen.service.generation_service import GenerationService
            generation_service = GenerationService()
        self.generation_service = generation_service

    def generate_idea(self, data: bytes, filename: str = "") -> str:
        """提取PDF文本并生成研究思路文本."""
        source_text = self.extractor.extract_bytes(data, filename)
        return self.generation_service.research_idea(source_text)

    def generate_idea_from_file(self, file_path: Union[str, Path]) -> str:
        source_text = self.extractor.extract_file(file_path)
        return self.generation_service.research_idea(source_text)

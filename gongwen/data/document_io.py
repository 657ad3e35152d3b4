"""文档读写操作."""

import os
import re
import tempfile
from pathlib import Path
from typing import Union

from loguru import logger

from gongwen.config.settings import settings
from gongwen.data.line_classifier import detect_title_index

_UNSAFE_NAME_CHARS = re.compile(r'[\\/:*?"<>|]')


class DocumentIO:
    """文档读写操作类."""

    @staticmethod
    def load_text(file_path: Union[str, Path]) -> str:
        """读取UTF-8文本文件.

        Args:
            file_path: 文件路径

        Returns:
            文件内容

        Raises:
            FileNotFoundError: 文件不存在
            ValueError: 文件不是有效的UTF-8文本
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"文件不存在: {file_path}")

        try:
            text = file_path.read_text(encoding="utf-8")
            logger.info(f"已加载文本: {file_path}")
            return text
        except UnicodeDecodeError as e:
            logger.error(f"加载文本失败: {e}")
            raise ValueError(f"加载文本失败: {e}")

    @staticmethod
    def save_bytes(data: bytes, output_path: Union[str, Path]) -> Path:
        """写入文件.

        先写入同目录下的临时文件再替换目标文件，临时文件在任何情况下都会被清理。

        Args:
            data: 文件内容
            output_path: 输出文件路径

        Returns:
            输出文件路径

        Raises:
            ValueError: 保存失败
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=".gongwen-", dir=output_path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.replace(tmp_name, output_path)
            logger.info(f"已保存文档: {output_path}")
            return output_path
        except OSError as e:
            logger.error(f"保存文档失败: {e}")
            raise ValueError(f"保存文档失败: {e}")
        finally:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)

    @staticmethod
    def export_name(content: str) -> str:
        """根据文档标题生成导出文件名（不含扩展名）.

        优先使用识别到的标题，其次为第一个非空行；去除文件名非法字符并截取前40个字符。

        Args:
            content: 文档文本

        Returns:
            文件名
        """
        fallback = settings.document.fallback_name
        lines = re.split(r"\r?\n", content)
        title_index = detect_title_index(lines)
        title_line = (lines[title_index].strip() if title_index >= 0 else "") or next(
            (line.strip() for line in lines if line.strip()), fallback
        )
        name = _UNSAFE_NAME_CHARS.sub("", title_line)[:settings.document.max_name_length]
        return name or fallback

"""预检报告生成器."""

from pathlib import Path
from typing import List, Union

from loguru import logger

from gongwen.data.models import PreflightIssue


class ReportGenerator:
    """预检报告生成器."""

    def generate_report(
        self, issues: List[PreflightIssue], content: str, output_path: Union[str, Path]
    ) -> None:
        """生成预检报告.

        Args:
            issues: 预检问题列表
            content: 文档文本，用于给出问题所在行
            output_path: 输出文件路径
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(output_path, "w", encoding="utf-8") as f:
                f.write("# 导出预检报告\n\n")
                f.write(f"共 {len(issues)} 项问题，已确认继续导出\n\n")

                for i, issue in enumerate(issues, 1):
                    line_number = content.count("\n", 0, min(issue.position, len(content))) + 1
                    f.write(f"## {i}. {issue.label}\n\n")
                    f.write(f"- 类别: {issue.category or '其他'}\n")
                    f.write(f"- 位置: 第{line_number}行（偏移 {issue.position}）\n")
                    if issue.count is not None:
                        f.write(f"- 实际字数: {issue.count}\n")
                    f.write("\n")

            logger.info(f"已生成预检报告: {output_path}")
        except OSError as e:
            logger.error(f"生成预检报告失败: {e}")
            raise ValueError(f"生成预检报告失败: {e}")

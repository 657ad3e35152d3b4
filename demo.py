from gongwen.data.markup_tagger import build_markup
from gongwen.data.preflight import build_preflight_items
from gongwen.service.exporter import ExportFormat, ExportOrchestrator
from loguru import logger

text = "\n".join([
    "〔沈师办发〔2024〕12号〕",
    "关于召开年度总结会议的通知",
    "各学院、各部门：",
    "为做好年度总结工作，请于〔占位：YYYY年MM月DD日〕前报送总结材料。",
    "沈阳师范大学",
    "〔占位：YYYY年MM月DD日〕",
])

print(build_markup(text))

for issue in build_preflight_items(text):
    logger.warning(issue.label)

exporter = ExportOrchestrator()
result = exporter.export(text, ExportFormat.DOCX, output_dir="output", force=True)
print(f"输出文件: {result.output_path}")
print(f"报告文件: {result.report_path}")

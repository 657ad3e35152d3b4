"""Word文档渲染器.

分两步：标记记录 -> 段落块列表（build_blocks，纯数据）-> python-docx 文档（render_blocks）。
任何标记记录都会得到一个段落，无法识别的按正文处理；占位符片段一律黄色高亮。
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_COLOR_INDEX, WD_LINE_SPACING
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Mm, Pt
from loguru import logger

from gongwen.data import layout
from gongwen.data.layout import FontSpec, ParagraphStyle, RuleSpec
from gongwen.data.markup_tagger import parse_markup, split_notes
from gongwen.data.models import LineRole, TaggedLine
from gongwen.data.placeholder_normalizer import split_placeholder_segments

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}

# pPr 中位于 pBdr 之后的元素，插入边框时需保持顺序
_PBDR_SUCCESSORS = (
    "w:shd", "w:tabs", "w:suppressAutoHyphens", "w:kinsoku", "w:wordWrap",
    "w:overflowPunct", "w:topLinePunct", "w:autoSpaceDE", "w:autoSpaceDN",
    "w:bidi", "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind",
    "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
    "w:textDirection", "w:textAlignment", "w:textboxTightWrap", "w:outlineLvl",
    "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr", "w:pPrChange",
)


@dataclass
class RunBlock:
    text: str
    font: FontSpec
    size_pt: float
    bold: bool = False
    highlight: bool = False


@dataclass
class ParagraphBlock:
    """段落块：文本段落或分隔线段落（rule 不为空）."""

    style: ParagraphStyle
    runs: List[RunBlock] = field(default_factory=list)
    rule: Optional[RuleSpec] = None
    role: Optional[LineRole] = None

    @property
    def is_rule(self) -> bool:
        return self.rule is not None


def placeholder_runs(text: str, font: FontSpec, size_pt: float, bold: bool = False) -> List[RunBlock]:
    """按占位符切分文本并生成文本块."""
    return [
        RunBlock(segment.text, font, size_pt, bold=bold, highlight=segment.is_placeholder)
        for segment in split_placeholder_segments(text)
    ]


def rule_block(rule: RuleSpec) -> ParagraphBlock:
    style = ParagraphStyle(
        font=layout.BASE_FONT,
        space_before_pt=rule.space_before_pt,
        space_after_pt=rule.space_after_pt,
        line_pt=rule.line_pt,
    )
    return ParagraphBlock(style=style, rule=rule)


def text_block(line: TaggedLine, style: ParagraphStyle) -> ParagraphBlock:
    runs = placeholder_runs(line.text, style.font, style.size_pt, style.bold)
    return ParagraphBlock(style=style, runs=runs, role=line.role)


def body_block(line: TaggedLine) -> ParagraphBlock:
    """正文段落，行内注释使用小字号."""
    style = layout.BODY_STYLE
    runs = []
    for text, is_note in split_notes(line.text):
        if not text:
            continue
        size = layout.NOTE_SIZE_PT if is_note else style.size_pt
        runs.extend(placeholder_runs(text, style.font, size))
    return ParagraphBlock(style=style, runs=runs, role=LineRole.BODY)


def build_blocks(tagged: List[TaggedLine]) -> List[ParagraphBlock]:
    """把标记记录转换为段落块.

    文号后跟红色分隔线；抄送/印发组成的版记区首次出现时先加一条粗线，
    印发说明后再以粗线收尾。

    Args:
        tagged: 标记记录

    Returns:
        段落块列表
    """
    blocks: List[ParagraphBlock] = []
    post_section_started = False

    for line in tagged:
        role = line.role
        if role == LineRole.BLANK:
            blank_style = layout.style_for(LineRole.BLANK)
            blocks.append(ParagraphBlock(
                style=blank_style,
                runs=[RunBlock("", blank_style.font, blank_style.size_pt)],
                role=LineRole.BLANK,
            ))
        elif role == LineRole.DOC_NUMBER:
            blocks.append(text_block(line, layout.style_for(role)))
            blocks.append(rule_block(layout.DOC_NUMBER_RULE))
        elif role == LineRole.ATTACHMENT:
            blocks.append(text_block(line, layout.attachment_style(line.text)))
        elif role == LineRole.POST_DISTRIBUTION:
            if not post_section_started:
                blocks.append(rule_block(layout.POST_RULE))
                post_section_started = True
            blocks.append(text_block(line, layout.style_for(role)))
        elif role == LineRole.PRINT_NOTICE:
            if not post_section_started:
                blocks.append(rule_block(layout.POST_RULE))
                post_section_started = True
            else:
                blocks.append(rule_block(layout.POST_INNER_RULE))
            blocks.append(text_block(line, layout.style_for(role)))
            blocks.append(rule_block(layout.POST_RULE))
        elif role in layout.ROLE_STYLES and role != LineRole.BODY:
            blocks.append(text_block(line, layout.style_for(role)))
        else:
            blocks.append(body_block(line))

    return blocks


def set_run_font(run, font: FontSpec, size_pt: float, bold: bool = False) -> None:
    """设置文本块字体，中文字体写入 eastAsia 属性."""
    run.font.name = font.ascii
    run.font.size = Pt(size_pt)
    run.font.bold = bold
    rfonts = run._element.get_or_add_rPr().get_or_add_rFonts()
    rfonts.set(qn("w:eastAsia"), font.east_asia)


def add_bottom_border(paragraph, rule: RuleSpec) -> None:
    """给段落加下边框."""
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    bottom = OxmlElement("w:bottom")
    bottom.set(qn("w:val"), "single")
    bottom.set(qn("w:sz"), str(rule.size))
    bottom.set(qn("w:space"), str(rule.space))
    bottom.set(qn("w:color"), rule.color)
    p_bdr.append(bottom)
    p_pr.insert_element_before(p_bdr, *_PBDR_SUCCESSORS)


def add_page_number_field(paragraph, font: FontSpec, size_pt: float) -> None:
    """插入自动更新的页码域."""
    def field_char(kind: str):
        run = paragraph.add_run()
        set_run_font(run, font, size_pt)
        element = OxmlElement("w:fldChar")
        element.set(qn("w:fldCharType"), kind)
        run._r.append(element)

    field_char("begin")
    instr_run = paragraph.add_run()
    set_run_font(instr_run, font, size_pt)
    instr = OxmlElement("w:instrText")
    instr.set(qn("xml:space"), "preserve")
    instr.text = "PAGE"
    instr_run._r.append(instr)
    field_char("separate")
    number_run = paragraph.add_run("1")
    set_run_font(number_run, font, size_pt)
    field_char("end")


class DocumentRenderer:
    """公文Word渲染器."""

    def __init__(self, page: layout.PageGeometry = layout.PAGE):
        """初始化渲染器.

        Args:
            page: 页面几何参数
        """
        self.page = page

    def render(self, tagged: List[TaggedLine], strict: bool = True) -> Document:
        """渲染标记记录为Word文档.

        Args:
            tagged: 标记记录
            strict: 是否启用奇偶页页码对齐

        Returns:
            Document对象
        """
        blocks = build_blocks(tagged)
        doc = self.render_blocks(blocks, strict)
        highlighted = sum(1 for block in blocks for run in block.runs if run.highlight)
        logger.info(f"已渲染 {len(blocks)} 个段落，其中占位符 {highlighted} 处，严格版式：{strict}")
        return doc

    def render_markup(self, markup: str, strict: bool = True) -> Document:
        """渲染标记文本."""
        return self.render(parse_markup(markup), strict)

    def render_bytes(self, markup: str, strict: bool = True) -> bytes:
        """渲染标记文本并返回 .docx 字节内容."""
        return self.to_bytes(self.render_markup(markup, strict))

    def render_tagged_bytes(self, tagged: List[TaggedLine], strict: bool = True) -> bytes:
        """直接渲染标记记录并返回 .docx 字节内容，不经过标记文本."""
        return self.to_bytes(self.render(tagged, strict))

    @staticmethod
    def to_bytes(doc: Document) -> bytes:
        buffer = BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    def render_blocks(self, blocks: List[ParagraphBlock], strict: bool) -> Document:
        doc = Document()
        self._setup_page(doc)
        self._setup_footer(doc, strict)
        for block in blocks:
            self._add_block(doc, block)
        return doc

    def _setup_page(self, doc: Document) -> None:
        """设置A4纸张、页边距与行网格."""
        page = self.page
        section = doc.sections[0]
        section.page_width = Mm(page.width_mm)
        section.page_height = Mm(page.height_mm)
        section.top_margin = Mm(page.top_mm)
        section.left_margin = Mm(page.left_mm)
        section.right_margin = Mm(page.right_mm)
        section.bottom_margin = Mm(page.bottom_mm)
        section.header_distance = Mm(page.header_mm)
        section.footer_distance = Mm(page.footer_mm)

        sect_pr = section._sectPr
        grid = sect_pr.find(qn("w:docGrid"))
        if grid is None:
            grid = OxmlElement("w:docGrid")
            sect_pr.append(grid)
        grid.set(qn("w:type"), "lines")
        grid.set(qn("w:linePitch"), str(int(round(page.line_pitch_pt * 20))))

    def _setup_footer(self, doc: Document, strict: bool) -> None:
        """页脚页码：“—1—”样式."""
        section = doc.sections[0]
        alignments = layout.footer_alignments(strict)
        doc.settings.odd_and_even_pages_header_footer = strict

        footers = {"default": section.footer}
        if "even" in alignments:
            footers["even"] = section.even_page_footer
        for name, footer in footers.items():
            paragraph = footer.paragraphs[0] if footer.paragraphs else footer.add_paragraph()
            paragraph.alignment = ALIGNMENTS[alignments[name]]
            paragraph.paragraph_format.space_before = Pt(0)
            paragraph.paragraph_format.space_after = Pt(0)
            dash = paragraph.add_run(layout.FOOTER_DASH)
            set_run_font(dash, layout.FOOTER_FONT, layout.FOOTER_SIZE_PT)
            add_page_number_field(paragraph, layout.FOOTER_FONT, layout.FOOTER_SIZE_PT)
            dash = paragraph.add_run(layout.FOOTER_DASH)
            set_run_font(dash, layout.FOOTER_FONT, layout.FOOTER_SIZE_PT)

    def _add_block(self, doc: Document, block: ParagraphBlock) -> None:
        paragraph = doc.add_paragraph()
        style = block.style
        fmt = paragraph.paragraph_format
        paragraph.alignment = ALIGNMENTS.get(style.alignment, WD_ALIGN_PARAGRAPH.LEFT)
        fmt.space_before = Pt(style.space_before_pt)
        fmt.space_after = Pt(style.space_after_pt)
        if style.line_pt is not None:
            fmt.line_spacing = Pt(style.line_pt)
            fmt.line_spacing_rule = WD_LINE_SPACING.EXACTLY
        if style.first_line_indent_pt:
            fmt.first_line_indent = Pt(style.first_line_indent_pt)

        if block.rule is not None:
            add_bottom_border(paragraph, block.rule)
            return

        for run_block in block.runs:
            run = paragraph.add_run(run_block.text)
            set_run_font(run, run_block.font, run_block.size_pt, run_block.bold)
            if run_block.highlight:
                run.font.highlight_color = WD_COLOR_INDEX.YELLOW

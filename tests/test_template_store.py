"""自定义模板存储测试."""

from gongwen.data.models import WritingMode
from gongwen.data.template_store import TemplateStore
from gongwen.data.templates import check_template_completeness, selected_specs


def test_save_and_load(tmp_path):
    """测试按写作模式保存模板."""
    store = TemplateStore(tmp_path / "templates.yaml")
    assert store.load(WritingMode.GOV) == ""

    store.save(WritingMode.GOV, "主送各学院\n落款某学院\n成文日期")
    store.save(WritingMode.PAPER, "论文要求")

    reloaded = TemplateStore(tmp_path / "templates.yaml")
    assert reloaded.load(WritingMode.GOV) == "主送各学院\n落款某学院\n成文日期"
    assert reloaded.load(WritingMode.PAPER) == "论文要求"


def test_malformed_store_is_empty(tmp_path):
    path = tmp_path / "templates.yaml"
    path.write_text("- 列表\n- 不是映射\n", encoding="utf-8")
    assert TemplateStore(path).load(WritingMode.GOV) == ""


def test_template_completeness():
    """测试自定义模板要素检查."""
    assert check_template_completeness("") == ["请补充模板要求内容"]
    assert check_template_completeness("语气正式") == ["主送要求", "落款要求", "成文日期要求"]
    assert check_template_completeness("主送各部门，署名沈阳师范大学，YYYY年MM月DD日") == []


def test_selected_specs_keep_catalog_order():
    assert [spec.key for spec in selected_specs(["results", "abstract"])] == ["abstract", "results"]
    assert len(selected_specs()) == 11

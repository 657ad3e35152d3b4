"""数据处理模块.""" 

"""
gongwen/data/
├── __init__.py
├── models.py                  # 数据模型定义
├── line_classifier.py         # 行结构识别
├── placeholder_normalizer.py  # 占位符识别与日期占位
├── markup_tagger.py           # 标记文本生成与解析
├── layout.py                  # 公文版式参数
├── document_renderer.py       # Word渲染
├── preflight/                 # 导出预检
│   ├── __init__.py
│   ├── base_checker.py
│   ├── gov_checker.py
│   ├── paper_checker.py
│   └── placeholder_checker.py
├── history.py                 # 编辑历史与版本
├── templates.py               # 文种、模板与论文章节目录
├── template_store.py          # 自定义模板存储
├── document_io.py             # 文档读写操作
└── report_generator.py        # 预检报告生成
"""

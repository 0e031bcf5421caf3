"""tests for heuristic tips."""

from wbs_editor.core.advisor import MAX_TIPS, make_tips, missing_disciplines
from wbs_editor.core.tree import WbsNode


def _section(key: str, suffixes: str) -> WbsNode:
    return WbsNode(key=key, label=f"{key} s", children=[
        WbsNode(key=f"{key}.{s}", label=f"{key}.{s}", docs=["spec.pdf"]) for s in suffixes
    ])


class TestAdvisor:
    """tests for make_tips."""

    def test_missing_disciplines(self):
        assert missing_disciplines(_section("9", "AP")) == ["C", "L", "M", "K"]
        assert missing_disciplines(_section("9", "APCLMK")) == []

    def test_section_tip(self):
        tree = WbsNode(key="root", label="r", children=[_section("9", "AP")])
        assert make_tips(tree) == ["section 9 seems to be missing disciplines: C, L, M, K"]

    def test_leaf_without_docs(self):
        tree = WbsNode(key="root", label="r", children=[
            WbsNode(key="1", label="one", children=[
                WbsNode(key="1.A", label="a"),
                WbsNode(key="1.P", label="p", docs=["d"]),
                WbsNode(key="1.C", label="c", docs=[]),
                WbsNode(key="1.L", label="l", docs=["d"]),
                WbsNode(key="1.M", label="m", docs=["d"]),
                WbsNode(key="1.K", label="k", docs=["d"]),
            ]),
        ])
        assert make_tips(tree) == [
            'consider attaching related documents to 1.A ("a")',
            'consider attaching related documents to 1.C ("c")',
        ]

    def test_default_tree_capped(self, default_tree):
        tips = make_tips(default_tree)
        assert len(tips) == MAX_TIPS
        assert tips[0] == 'consider attaching related documents to 1.A.1 ("1.A.1 Aquisições da UCri (equipamentos, instrumentos, serviços)")'

    def test_clean_tree_has_no_tips(self):
        tree = WbsNode(key="root", label="r", children=[_section("1", "APCLMK")])
        assert make_tips(tree) == []

    def test_lone_root_has_no_tips(self):
        assert make_tips(WbsNode(key="root", label="r")) == []

    def test_does_not_mutate(self, default_tree):
        before = default_tree.to_dict()
        make_tips(default_tree)
        assert default_tree.to_dict() == before

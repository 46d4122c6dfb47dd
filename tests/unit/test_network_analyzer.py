"""
Unit tests for the network analyzer.

Test-automator agent requirements:
- Independent tests (no shared state)
- Atomic tests (one assertion per test where possible)
- Clear naming (test_<module>_<method>_<scenario>)
- Proper error handling
"""

import pytest

from bia.engine.network.analyzer import NetworkAnalyzer, edge_cost
from bia.engine.network.graph_builder import DependencyGraphBuilder
from bia.models.enums import NodeKind
from tests.conftest import make_dependency, make_process, make_resource, make_resource_dependency


def build_graph(process_ids, dependencies=(), resources=()):
    """Graph of named processes (label = id) and dependencies."""
    return DependencyGraphBuilder().build(
        [make_process(pid, name=pid) for pid in process_ids],
        list(resources),
        dependencies=list(dependencies),
    )


def star_graph():
    """Hub depended on by four leaves, plus one isolated node."""
    deps = [make_dependency(f"d{i}", source=f"leaf{i}", target="hub") for i in range(4)]
    return build_graph(["hub", "leaf0", "leaf1", "leaf2", "leaf3", "lonely"], deps)


# ============================================================================
# Construction
# ============================================================================


class TestNetworkAnalyzerInit:
    """Test NetworkAnalyzer initialization."""

    def test_defaults(self):
        analyzer = NetworkAnalyzer()
        assert analyzer.spof_threshold == 2
        assert analyzer.spof_top_n == 10
        assert analyzer.critical_path_top_n == 20

    def test_negative_threshold_raises(self):
        with pytest.raises(ValueError, match="spof_threshold"):
            NetworkAnalyzer(spof_threshold=-1)

    @pytest.mark.parametrize("field", ["spof_top_n", "critical_path_top_n", "critical_path_max_nodes"])
    def test_non_positive_limits_raise(self, field):
        with pytest.raises(ValueError, match=field):
            NetworkAnalyzer(**{field: 0})


# ============================================================================
# Centrality & SPOF
# ============================================================================


class TestDegreeCentrality:
    """Test undirected degree."""

    def test_in_plus_out_degree(self):
        centrality = NetworkAnalyzer().degree_centrality(star_graph())

        assert centrality["process:hub"] == 4
        assert centrality["process:leaf0"] == 1
        assert centrality["process:lonely"] == 0

    def test_parallel_edges_counted(self):
        deps = [
            make_dependency("d1", source="a", target="b"),
            make_dependency("d2", source="a", target="b"),
        ]
        centrality = NetworkAnalyzer().degree_centrality(build_graph(["a", "b"], deps))
        assert centrality["process:a"] == 2


class TestDetectSpof:
    """Test SPOF flagging."""

    def test_hub_flagged(self):
        spofs = NetworkAnalyzer().detect_spof(star_graph())

        assert [s.id for s in spofs] == ["process:hub"]
        assert spofs[0].name == "hub"
        assert spofs[0].centrality == 4
        assert spofs[0].type == NodeKind.PROCESS

    def test_degree_equal_to_threshold_not_flagged(self):
        deps = [make_dependency("d1", source="a", target="b"), make_dependency("d2", source="b", target="c")]
        assert NetworkAnalyzer().detect_spof(build_graph(["a", "b", "c"], deps)) == []

    def test_sorted_by_degree_descending(self):
        deps = [make_dependency(f"x{i}", source=f"l{i}", target="big") for i in range(5)]
        deps += [make_dependency(f"y{i}", source=f"m{i}", target="mid") for i in range(3)]
        ids = ["big", "mid"] + [f"l{i}" for i in range(5)] + [f"m{i}" for i in range(3)]

        spofs = NetworkAnalyzer().detect_spof(build_graph(ids, deps))

        assert [s.id for s in spofs] == ["process:big", "process:mid"]

    def test_ties_keep_node_key_order(self):
        deps = [make_dependency(f"x{i}", source=f"l{i}", target="zeta") for i in range(3)]
        deps += [make_dependency(f"y{i}", source=f"m{i}", target="alpha") for i in range(3)]
        ids = ["zeta", "alpha"] + [f"l{i}" for i in range(3)] + [f"m{i}" for i in range(3)]

        spofs = NetworkAnalyzer().detect_spof(build_graph(ids, deps))

        assert [s.id for s in spofs] == ["process:alpha", "process:zeta"]

    def test_top_n_caps_result(self):
        spofs = NetworkAnalyzer().detect_spof(star_graph(), threshold=0, top_n=2)
        assert len(spofs) == 2

    def test_resource_spof_typed(self):
        dep_graph = DependencyGraphBuilder().build(
            [],
            [make_resource("db", name="DB")] + [make_resource(f"r{i}") for i in range(3)],
            resource_dependencies=[
                make_resource_dependency(f"rd{i}", source=f"r{i}", target="db") for i in range(3)
            ],
        )
        spofs = NetworkAnalyzer().detect_spof(dep_graph)

        assert [s.id for s in spofs] == ["resource:db"]
        assert spofs[0].name == "DB"
        assert spofs[0].type == NodeKind.RESOURCE


# ============================================================================
# Critical paths
# ============================================================================


class TestEdgeCost:
    """Test the Dijkstra cost callable."""

    def test_cost_is_six_minus_weight(self):
        assert edge_cost("a", "b", {"k": {"criticality_weight": 5}}) == 1

    def test_cheapest_parallel_edge_used(self):
        keydict = {"k1": {"criticality_weight": 2}, "k2": {"criticality_weight": 4}}
        assert edge_cost("a", "b", keydict) == 2


class TestFindCriticalPaths:
    """Test critical path search."""

    def test_only_route_selected(self):
        deps = [
            make_dependency("ab", source="A", target="B", criticality=5),
            make_dependency("bc", source="B", target="C", criticality=1),
        ]
        paths, truncated = NetworkAnalyzer().find_critical_paths(build_graph(["A", "B", "C"], deps))
        a_to_c = next(p for p in paths if p.path[0] == "A" and p.path[-1] == "C")

        assert a_to_c.path == ["A", "B", "C"]
        assert a_to_c.criticality == 6
        assert a_to_c.length == 3
        assert truncated is False

    def test_cheaper_direct_edge_wins(self):
        deps = [
            make_dependency("ab", source="A", target="B", criticality=5),
            make_dependency("bc", source="B", target="C", criticality=1),
            make_dependency("ac", source="A", target="C", criticality=2),
        ]
        paths, _ = NetworkAnalyzer().find_critical_paths(build_graph(["A", "B", "C"], deps))
        a_to_c = next(p for p in paths if p.path[0] == "A" and p.path[-1] == "C")

        assert a_to_c.path == ["A", "C"]
        assert a_to_c.criticality == 2
        assert a_to_c.node_ids == ["process:A", "process:C"]

    def test_ranked_by_criticality_descending(self):
        deps = [
            make_dependency("ab", source="A", target="B", criticality=5),
            make_dependency("bc", source="B", target="C", criticality=4),
        ]
        paths, _ = NetworkAnalyzer().find_critical_paths(build_graph(["A", "B", "C"], deps))

        assert [p.criticality for p in paths] == [9, 5, 4]

    def test_unreachable_pairs_omitted(self):
        deps = [make_dependency("ab", source="A", target="B")]
        paths, _ = NetworkAnalyzer().find_critical_paths(build_graph(["A", "B", "C"], deps))

        assert len(paths) == 1
        assert paths[0].path == ["A", "B"]

    def test_top_n_caps_paths(self):
        deps = [make_dependency(f"d{i}", source="hub", target=f"t{i}") for i in range(5)]
        ids = ["hub"] + [f"t{i}" for i in range(5)]
        paths, _ = NetworkAnalyzer(critical_path_top_n=3).find_critical_paths(build_graph(ids, deps))

        assert len(paths) == 3

    def test_node_ceiling_skips_search(self):
        deps = [make_dependency("ab", source="A", target="B")]
        analyzer = NetworkAnalyzer(critical_path_max_nodes=2)

        paths, truncated = analyzer.find_critical_paths(build_graph(["A", "B", "C"], deps))

        assert paths == []
        assert truncated is True

    def test_empty_graph(self):
        paths, truncated = NetworkAnalyzer().find_critical_paths(build_graph([]))
        assert paths == []
        assert truncated is False


# ============================================================================
# Statistics & full analysis
# ============================================================================


class TestNetworkStats:
    """Test density and average degree."""

    def test_stats(self):
        deps = [make_dependency("ab", source="A", target="B"), make_dependency("bc", source="B", target="C")]
        stats = NetworkAnalyzer().network_stats(build_graph(["A", "B", "C", "D"], deps))

        assert stats.nodes == 4
        assert stats.edges == 2
        assert stats.density == pytest.approx(4 / 12)
        assert stats.avg_degree == pytest.approx(1.0)

    def test_single_node_density_zero(self):
        stats = NetworkAnalyzer().network_stats(build_graph(["A"]))
        assert stats.density == 0.0
        assert stats.avg_degree == 0.0

    def test_empty_graph_zero(self):
        stats = NetworkAnalyzer().network_stats(build_graph([]))
        assert stats.density == 0.0
        assert stats.avg_degree == 0.0


class TestAnalyze:
    """Test the composed analysis."""

    def test_result_carries_all_queries(self):
        result = NetworkAnalyzer().analyze(star_graph())

        assert result.degree_centrality["process:hub"] == 4
        assert [s.id for s in result.spof_nodes] == ["process:hub"]
        assert len(result.critical_paths) == 4
        assert result.network_stats.nodes == 6
        assert result.critical_paths_truncated is False

    def test_truncation_reported_as_warning(self):
        result = NetworkAnalyzer(critical_path_max_nodes=2).analyze(star_graph())

        assert result.critical_paths_truncated is True
        assert any("Critical path search skipped" in w for w in result.warnings)

    def test_build_warnings_propagated(self):
        dep_graph = build_graph(["A"], [make_dependency("bad", source="A", target="missing")])
        result = NetworkAnalyzer().analyze(dep_graph)

        assert len(result.warnings) == 1

    def test_camel_case_dump(self):
        dumped = NetworkAnalyzer().analyze(star_graph()).model_dump(by_alias=True)

        assert "degreeCentrality" in dumped
        assert "spofNodes" in dumped
        assert "avgDegree" in dumped["networkStats"]

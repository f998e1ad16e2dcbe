import pytest

from trailgraph.services.search_config import SearchConfig, SearchPresets


@pytest.mark.unit
class TestSearchConfig:

    def test_defaults(self):
        config = SearchConfig()
        assert config.algorithm == "astar"
        assert config.heuristic == "degrees"
        assert config.stopping_rule == "first_meeting"
        assert config.cost_source == "computed"

    @pytest.mark.parametrize("field_name,value", [
        ("algorithm", "greedy"),
        ("heuristic", "euclid"),
        ("stopping_rule", "whenever"),
        ("cost_source", "estimated"),
    ])
    def test_rejects_unknown_values(self, field_name, value):
        with pytest.raises(ValueError, match=field_name):
            SearchConfig(**{field_name: value})

    def test_with_overrides_skips_none(self):
        config = SearchConfig().with_overrides(algorithm="bidirectional", heuristic=None)
        assert config.algorithm == "bidirectional"
        assert config.heuristic == "degrees"

    def test_with_overrides_validates(self):
        with pytest.raises(ValueError):
            SearchConfig().with_overrides(stopping_rule="never")

    def test_presets(self):
        assert SearchPresets.reference() == SearchConfig()
        assert SearchPresets.bidirectional().algorithm == "bidirectional"

        strict = SearchPresets.strict_optimal()
        assert (strict.heuristic, strict.stopping_rule) == ("geodesic", "optimal")

        assert SearchPresets.dijkstra().heuristic == "zero"
        assert SearchPresets.provided_costs().cost_source == "provided"

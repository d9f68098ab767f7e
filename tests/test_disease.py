# tests/test_disease.py
import pytest

from helpers import ScriptedRng
from plantsim.disease import DiseaseModel
from plantsim.state import DiseaseType, Leaf, LeafPosition, PestType, PlantState


def make_leaf(leaf_id, disease=DiseaseType.NONE, progress=0):
    return Leaf(id=leaf_id, position=LeafPosition.BOTTOM, disease_type=disease, disease_progress=progress)


@pytest.fixture
def model():
    return DiseaseModel()


class TestOnset:
    def test_infects_random_healthy_leaf_with_pest_disease(self, model):
        state = PlantState(has_pest=True, pest=PestType.APHIDS, leaves=[make_leaf(1), make_leaf(2)])
        rng = ScriptedRng([1])
        leaf = model.onset(state, rng)
        assert leaf.id == 2
        assert leaf.is_diseased
        assert leaf.disease_type is DiseaseType.LEAF_SPOT
        assert leaf.disease_progress == 10
        assert not state.leaves[0].is_diseased

    def test_only_healthy_leaves_are_candidates(self, model):
        state = PlantState(has_pest=True, pest=PestType.FUNGUS, leaves=[
            make_leaf(1, DiseaseType.LEAF_SPOT, 30), make_leaf(2), make_leaf(3),
        ])
        rng = ScriptedRng([0])
        assert model.onset(state, rng).id == 2
        assert rng.calls == [(0, 2, 0)]
        assert state.leaves[1].disease_type is DiseaseType.ROOT_ROT

    def test_no_leaves_or_no_pest_is_noop(self, model):
        rng = ScriptedRng()
        assert model.onset(PlantState(has_pest=True, pest=PestType.MITES), rng) is None
        assert model.onset(PlantState(leaves=[make_leaf(1)]), rng) is None
        assert rng.calls == []


class TestProgression:
    def test_severe_leaf_costs_health_without_removal(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.LEAF_SPOT, 45)])
        rng = ScriptedRng([10, 99])  # +10, contagion roll misses
        assert model.progress(state, rng) is None
        assert state.leaves[0].disease_progress == 55
        assert state.health == 98  # 55 // 20

    def test_mild_leaf_skips_contagion_roll(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.LEAF_SPOT, 10), make_leaf(2)])
        rng = ScriptedRng([14])
        model.progress(state, rng)
        assert state.leaves[0].disease_progress == 24
        assert state.health == 100
        assert rng.draws == []

    def test_increment_range_is_five_to_fifteen(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.LEAF_SPOT, 0)])
        rng = ScriptedRng([5])
        model.progress(state, rng)
        assert rng.calls == [(5, 15, 5)]

    def test_leaf_reaching_100_is_removed_and_scan_stops(self, model):
        first = make_leaf(1, DiseaseType.ROOT_ROT, 95)
        second = make_leaf(2, DiseaseType.ROOT_ROT, 20)
        state = PlantState(leaves=[first, second])
        rng = ScriptedRng([5, 99])
        removed = model.progress(state, rng)

        assert removed is first
        assert [leaf.id for leaf in state.leaves] == [2]
        # 100 // 20 severity plus the flat removal penalty
        assert state.health == 85
        # second leaf untouched this pass
        assert second.disease_progress == 20
        assert rng.draws == []

    def test_progress_caps_at_100(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.LEAF_SPOT, 99), make_leaf(2)])
        model.progress(state, ScriptedRng([14, 99]))
        assert [leaf.id for leaf in state.leaves] == [2]
        assert state.health == 85

    def test_progression_continues_after_pest_is_gone(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.POWDERY_MILDEW, 20)])
        model.progress(state, ScriptedRng([7]))
        assert state.leaves[0].disease_progress == 27


class TestContagion:
    def test_roll_below_30_infects_healthy_leaf(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.LEAF_SPOT, 60), make_leaf(2), make_leaf(3)])
        rng = ScriptedRng([5, 29, 1])
        model.progress(state, rng)
        assert state.leaves[0].disease_progress == 65
        assert state.health == 97
        assert state.leaves[2].disease_type is DiseaseType.LEAF_SPOT
        assert state.leaves[2].disease_progress == 5
        assert not state.leaves[1].is_diseased

    def test_spread_copies_first_diseased_leaf(self, model):
        state = PlantState(leaves=[
            make_leaf(1, DiseaseType.POWDERY_MILDEW, 20),
            make_leaf(2, DiseaseType.ROOT_ROT, 70),
            make_leaf(3),
        ])
        rng = ScriptedRng([5, 5, 0, 0])
        model.progress(state, rng)
        assert state.leaves[2].disease_type is DiseaseType.POWDERY_MILDEW

    def test_single_roll_for_many_severe_leaves(self, model):
        state = PlantState(leaves=[
            make_leaf(1, DiseaseType.LEAF_SPOT, 60),
            make_leaf(2, DiseaseType.LEAF_SPOT, 60),
            make_leaf(3),
        ])
        rng = ScriptedRng([5, 5, 30])
        model.progress(state, rng)
        assert rng.draws == []
        assert not state.leaves[2].is_diseased

    def test_no_healthy_leaf_left_is_noop(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.LEAF_SPOT, 60)])
        rng = ScriptedRng([5, 0])
        model.progress(state, rng)
        assert rng.draws == []

    def test_hit_after_last_diseased_leaf_rots_away_still_spreads(self, model):
        state = PlantState(leaves=[make_leaf(1, DiseaseType.ROOT_ROT, 95), make_leaf(2)])
        rng = ScriptedRng([5, 0, 0])
        assert model.progress(state, rng).id == 1
        assert rng.draws == []
        assert [c[:2] for c in rng.calls] == [(5, 15), (0, 100), (0, 1)]
        assert state.leaves[0].disease_type is DiseaseType.ROOT_ROT
        assert state.leaves[0].disease_progress == 5
        assert state.health == 85


class TestCut:
    def test_cut_removes_diseased_leaf(self, model):
        state = PlantState(leaves=[make_leaf(1), make_leaf(2, DiseaseType.LEAF_SPOT, 40)])
        assert model.cut(state, 2)
        assert [leaf.id for leaf in state.leaves] == [1]

    def test_cut_healthy_or_unknown_leaf_is_noop(self, model):
        state = PlantState(leaves=[make_leaf(1)])
        assert not model.cut(state, 1)
        assert not model.cut(state, 42)
        assert len(state.leaves) == 1


def test_leaf_disease_flag_follows_type():
    leaf = make_leaf(1)
    assert not leaf.is_diseased
    leaf.infect(DiseaseType.ROOT_ROT, 150)
    assert leaf.is_diseased
    assert leaf.disease_progress == 100

"""
Tests for the offline and online phases of the MINAS engine.
"""

import numpy as np
import pytest

from streamminas.clustering import KMeans
from streamminas.decisionrule import StandardDeviationRule, StandardDeviationThreshold
from streamminas.model import MinasConfiguration, initialize_model, process
from streamminas.utils.data_structure import Category, Instance, Labeling


@pytest.fixture
def make_config():
    def _make(**overrides):
        params = dict(
            clustering_for_initialization=KMeans(1),
            clustering_for_novelty_detection=KMeans(1),
            microcluster_decision_rule=StandardDeviationThreshold(2),
            data_instance_decision_rule=StandardDeviationRule(2),
            temporary_memory_max_size=100,
            minimum_cluster_size=3,
            window_size=1000,
            microcluster_lifespan=1000,
            instance_lifespan=1000,
            is_incremental=False,
        )
        params.update(overrides)
        return MinasConfiguration(**params)
    return _make


@pytest.fixture
def training_set(make_instances):
    return make_instances([[0, 0]] * 5, label="A") + make_instances([[5, 5]] * 5, label="B", start=6)


class TestInitializeModel:
    """Test suite for the offline phase."""

    def test_one_cluster_per_label(self, training_set, make_config):
        model = initialize_model(training_set, make_config())

        assert len(model.decision_model) == 2
        a, b = model.decision_model
        assert (a.label, a.category, a.n) == ("A", Category.KNOWN, 5)
        assert (b.label, b.category, b.n) == ("B", Category.KNOWN, 5)
        np.testing.assert_array_equal(a.centroid, [0, 0])
        np.testing.assert_array_equal(b.centroid, [5, 5])

    def test_initial_state(self, training_set, make_config):
        model = initialize_model(training_set, make_config())

        assert model.sleep_memory == []
        assert len(model.temporary_memory) == 0
        assert model.novelty_count == 0
        assert model.confusion_matrix.rows == ["A", "B"]

    def test_small_clusters_are_discarded(self, training_set, make_instances, make_config):
        training_set += make_instances([[9, 9], [9, 9]], label="C", start=11)

        model = initialize_model(training_set, make_config())

        assert [mc.label for mc in model.decision_model] == ["A", "B"]
        assert model.confusion_matrix.rows == ["A", "B", "C"]

    def test_training_set_is_sorted_by_timestamp(self, training_set, make_config):
        model = initialize_model(list(reversed(training_set)), make_config())

        assert [mc.label for mc in model.decision_model] == ["A", "B"]


class TestProcess:
    """Test suite for the online phase."""

    def test_explained_instance(self, training_set, make_config):
        model = initialize_model(training_set, make_config())
        cluster = model.decision_model[0]

        labelings = process(Instance([0, 0], "A", 11), model, make_config())

        assert labelings == [Labeling(11, "A", False)]
        assert model.last_timestamp == 11
        assert model.novelty_count == 0
        assert len(model.decision_model) == 2
        assert model.sleep_memory == []
        assert (cluster.n, cluster.timestamp) == (5, 11)
        assert model.confusion_matrix.get("A", "A") == 1

    def test_incremental_update(self, training_set, make_config):
        config = make_config(is_incremental=True)
        model = initialize_model(training_set, config)

        process(Instance([0, 0], "A", 11), model, config)

        cluster = model.decision_model[0]
        assert cluster.n == 6
        assert 11 in cluster.timestamps

    def test_unexplained_instance_waits_in_memory(self, training_set, make_config):
        model = initialize_model(training_set, make_config())

        labelings = process(Instance([50, 50], "Z", 11), model, make_config())

        assert labelings == []
        assert 11 in model.temporary_memory
        assert model.confusion_matrix.get_unknown("Z") == 1

    def test_novelty_on_empty_model(self, make_instances, make_config):
        config = make_config(temporary_memory_max_size=1, minimum_cluster_size=1)
        model = initialize_model(make_instances([[0, 0], [1, 1]], label="A"), config)
        assert model.decision_model == []

        labelings = process(Instance([50, 50], "X", 3), model, config)

        assert labelings == [Labeling(3, "0", True)]
        assert model.novelty_count == 1
        assert len(model.temporary_memory) == 0
        assert len(model.decision_model) == 1
        novelty = model.decision_model[0]
        assert (novelty.label, novelty.category) == ("0", Category.NOVELTY)
        assert model.confusion_matrix.get("X", "0", is_novel=True) == 1
        assert model.confusion_matrix.get_unknown("X") == 0

    def test_novelty_labels_are_sequential(self, make_instances, make_config):
        config = make_config(temporary_memory_max_size=1, minimum_cluster_size=1)
        model = initialize_model(make_instances([[0, 0], [1, 1]], label="A"), config)

        process(Instance([50, 50], "X", 3), model, config)
        labelings = process(Instance([-80, 10], "Y", 4), model, config)

        assert labelings == [Labeling(4, "1", True)]
        assert model.novelty_count == 2

    def test_candidates_below_minimum_size_stay_in_memory(self, training_set, make_config):
        config = make_config(temporary_memory_max_size=2, minimum_cluster_size=3)
        model = initialize_model(training_set, config)

        process(Instance([50, 50], "Z", 11), model, config)
        labelings = process(Instance([50, 51], "Z", 12), model, config)

        assert labelings == []
        assert len(model.temporary_memory) == 2
        assert model.novelty_count == 0

    def test_candidates_overlapping_the_model_stay_in_memory(self, training_set, make_config):
        config = make_config(temporary_memory_max_size=4, minimum_cluster_size=3)
        model = initialize_model(training_set, config)

        # centroid (0, 0) on top of "A" with standard deviation 3, silhouette is -1
        labelings = []
        for timestamp, point in enumerate([[-3, 0], [3, 0], [0, -3], [0, 3]], start=11):
            labelings += process(Instance(point, "Z", timestamp), model, config)

        assert labelings == []
        assert len(model.temporary_memory) == 4
        assert model.novelty_count == 0
        assert len(model.decision_model) == 2

    def test_novelty_detection_labels_every_member_once(self, training_set, make_config):
        config = make_config(temporary_memory_max_size=3)
        model = initialize_model(training_set, config)

        labelings = []
        for timestamp, point in enumerate([[50, 50], [50, 51], [51, 50]], start=11):
            labelings += process(Instance(point, "Z", timestamp), model, config)

        assert sorted(labeling.timestamp for labeling in labelings) == [11, 12, 13]
        assert all(labeling.label == "0" and labeling.is_novelty for labeling in labelings)
        assert len(model.temporary_memory) == 0
        assert model.confusion_matrix.get("Z", "0", is_novel=True) == 3
        assert model.confusion_matrix.get_unknown("Z") == 0

    def test_extension_adopts_identity(self, make_instances, make_config):
        config = make_config(temporary_memory_max_size=3, microcluster_decision_rule=StandardDeviationThreshold(100))
        # "B" has centroid (5, 5) and standard deviation 1
        training_set = make_instances([[0, 0]] * 5, label="A") \
            + make_instances([[4, 5], [6, 5], [4, 5], [6, 5]], label="B", start=6)
        model = initialize_model(training_set, config)

        labelings = []
        for timestamp, point in enumerate([[20, 20], [20, 21], [21, 20]], start=11):
            labelings += process(Instance(point, "B", timestamp), model, config)

        assert [labeling.label for labeling in labelings] == ["B", "B", "B"]
        assert not any(labeling.is_novelty for labeling in labelings)
        assert model.novelty_count == 0
        assert len(model.decision_model) == 3
        assert model.decision_model[-1].category == Category.KNOWN

    def test_forgetting(self, make_instances, make_config):
        config = make_config(window_size=10, microcluster_lifespan=5, instance_lifespan=5)
        model = initialize_model(make_instances([[0, 0]] * 3, label="A"), config)

        process(Instance([50, 50], "Z", 4), model, config)
        process(Instance([60, 60], "Z", 10), model, config)

        assert model.decision_model == []
        assert [mc.label for mc in model.sleep_memory] == ["A"]
        assert [instance.timestamp for instance in model.temporary_memory] == [10]

    def test_sleeping_cluster_is_reactivated(self, make_instances, make_config):
        config = make_config(
            clustering_for_novelty_detection=KMeans(2),
            temporary_memory_max_size=4,
            window_size=10,
            microcluster_lifespan=5,
            instance_lifespan=100,
        )
        # centroid (0, 0), standard deviation 1
        model = initialize_model(make_instances([[-1, 0], [1, 0], [-1, 0], [1, 0]], label="A"), config)
        sleeping = model.decision_model[0]

        assert process(Instance([100, 100], "Z", 20), model, config) == []
        assert model.sleep_memory == [sleeping]

        # the sleeping cluster no longer explains instances
        assert process(Instance([0, 0], "A", 21), model, config) == []
        assert process(Instance([0, 0], "A", 22), model, config) == []
        labelings = process(Instance([0, 0], "A", 23), model, config)

        assert labelings == [Labeling(21, "A", False), Labeling(22, "A", False), Labeling(23, "A", False)]
        assert model.sleep_memory == []
        assert sleeping in model.decision_model
        assert len(model.decision_model) == 2
        assert model.decision_model[-1].label == "A"
        assert [instance.timestamp for instance in model.temporary_memory] == [20]
        assert model.novelty_count == 0
        assert model.confusion_matrix.get("A", "A") == 3
        assert model.confusion_matrix.get_unknown("A") == 0

"""
Unit tests for points, instances, microclusters and the temporary memory.
"""

import numpy as np
import pytest

from streamminas.exceptions import PreconditionError
from streamminas.utils.data_structure import Category, Instance, MicroCluster, Point, TemporaryMemory


class TestPoint:
    """Test suite for Point and Instance."""

    def test_points_are_immutable(self):
        point = Point([1.0, 2.0])
        with pytest.raises(ValueError):
            point.x[0] = 3.0

    def test_equality_is_elementwise(self):
        assert Point([1.0, 2.0]) == Point([1.0, 2.0])
        assert Point([1.0, 2.0]) != Point([1.0, 2.5])
        assert hash(Point([1.0, 2.0])) == hash(Point([1.0, 2.0]))

    def test_distance(self):
        assert Point([0, 0]).distance(Point([3, 4])) == pytest.approx(5.0)

    def test_centroid(self):
        centroid = Point.calculate_centroid([Point([0, 0]), Point([2, 4]), Point([4, 2])])
        assert centroid == Point([2, 2])

    def test_centroid_of_nothing_fails(self):
        with pytest.raises(PreconditionError):
            Point.calculate_centroid([])

    def test_instances_differ_by_timestamp(self):
        assert Instance([1, 1], "a", 1) != Instance([1, 1], "a", 2)
        assert Instance([1, 1], "a", 1) == Instance([1, 1], "b", 1)


class TestMicroCluster:
    """Test suite for MicroCluster."""

    def test_statistics(self, make_cluster):
        cluster = make_cluster([[0, 0], [2, 0]], label="a")

        assert cluster.n == 2
        np.testing.assert_array_equal(cluster.linear_sum, [2, 0])
        np.testing.assert_array_equal(cluster.squared_sum, [4, 0])
        np.testing.assert_array_equal(cluster.centroid, [1, 0])
        assert cluster.get_standard_deviation() == pytest.approx(1.0)
        assert cluster.timestamps == {1, 2}
        assert cluster.timestamp == 2

    def test_singleton_has_no_spread(self, make_cluster):
        assert make_cluster([[3.3, -1.7]]).get_standard_deviation() == 0.0

    def test_absorb_keeps_statistics_consistent(self, make_cluster, make_instances):
        cluster = make_cluster([[0, 0]])

        for instance in make_instances([[1, 2], [3, 4], [5, 0]], start=10):
            cluster.absorb(instance)
            assert cluster.n == len(cluster.timestamps)
            np.testing.assert_allclose(cluster.centroid, cluster.linear_sum / cluster.n)

        assert cluster.timestamp == 12
        np.testing.assert_allclose(cluster.centroid, [2.25, 1.5])

    def test_update_cluster_without_summary_only_touches_timestamp(self, make_cluster):
        cluster = make_cluster([[0, 0], [2, 0]])
        cluster.update_cluster(Instance([10, 10], None, 42), update_summary=False)

        assert cluster.n == 2
        assert cluster.timestamp == 42
        assert 42 not in cluster.timestamps

    def test_merge(self, make_cluster):
        m1 = make_cluster([[0, 0], [2, 0]], label="a", start=1)
        m2 = make_cluster([[4, 4]], label="b", category=Category.NOVELTY, start=7)

        merged = MicroCluster.merge(m1, m2)

        assert merged.n == 3
        np.testing.assert_array_equal(merged.linear_sum, [6, 4])
        np.testing.assert_array_equal(merged.squared_sum, [20, 16])
        assert merged.timestamp == 7
        assert merged.label == "a"
        assert merged.category == Category.KNOWN
        assert merged.timestamps == set()

    def test_merge_is_commutative_on_statistics(self, make_cluster):
        m1 = make_cluster([[0, 1], [2, 3]])
        m2 = make_cluster([[5, 5], [1, 0], [2, 2]], start=3)

        ab = MicroCluster.merge(m1, m2)
        ba = MicroCluster.merge(m2, m1)

        assert ab.n == ba.n == m1.n + m2.n
        np.testing.assert_array_equal(ab.linear_sum, ba.linear_sum)
        np.testing.assert_array_equal(ab.squared_sum, ba.squared_sum)

    def test_empty_batch_fails(self):
        with pytest.raises(PreconditionError):
            MicroCluster([])

    def test_representative(self, make_cluster):
        cluster = make_cluster([[0, 0], [1, 1], [2, 2]])
        assert cluster.is_representative(3)
        assert not cluster.is_representative(4)


class TestTemporaryMemory:
    """Test suite for TemporaryMemory."""

    @pytest.fixture
    def memory(self, make_instances):
        memory = TemporaryMemory()
        for instance in make_instances([[0, 0], [1, 1], [0, 0], [2, 2]], label="x"):
            memory.append(instance)
        return memory

    def test_keeps_duplicated_points(self, memory):
        assert len(memory) == 4
        assert [instance.timestamp for instance in memory.get_all_instances()] == [1, 2, 3, 4]

    def test_remove_by_timestamps(self, memory):
        removed = memory.remove({1, 3, 99})

        assert [instance.timestamp for instance in removed] == [1, 3]
        assert [instance.timestamp for instance in memory] == [2, 4]
        assert 1 not in memory

    def test_forget(self, memory):
        expired = memory.forget(current_timestamp=6, lifespan=3)

        assert [instance.timestamp for instance in expired] == [1, 2]
        assert len(memory) == 2

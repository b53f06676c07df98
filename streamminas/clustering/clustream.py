from sklearn.utils import check_random_state

from streamminas.clustering.base import ClusteringAlgorithm, check_instances
from streamminas.clustering.kmeanspp import KMeansPlusPlus
from streamminas.exceptions import ConfigurationError
from streamminas.utils.cluster_utils import find_closest_cluster
from streamminas.utils.data_structure import MicroCluster

__all__ = ["CluStream"]

class CluStream(ClusteringAlgorithm):
    """Two-phase CluStream clustering [1].

    The first `training_size` instances are summarized by K-Means++ into a buffer of at most `buffer_size`
    microclusters. Each remaining instance is then absorbed by its closest microcluster if it falls within its
    radius, otherwise it starts a new microcluster after the two closest microclusters of the buffer were merged.

    [1] Aggarwal, Charu C., et al. "A framework for clustering evolving data streams."
    Proceedings 2003 VLDB conference. Morgan Kaufmann, 2003.

    Parameters
    ----------
    training_size : int
        Number of instances used to build the initial buffer
    buffer_size : int
        Maximum number of microclusters produced by the initial K-Means++
    random_state : int, numpy.random.RandomState or None
        Source of randomness for the K-Means++ seeding
    """
    def __init__(self, training_size, buffer_size, random_state=None):
        if training_size <= 0 or buffer_size <= 0:
            raise ConfigurationError(f"training_size and buffer_size must be positive, got {training_size} and {buffer_size}")

        self.training_size = training_size
        self.buffer_size = buffer_size
        self.random_state = random_state
        self._rng = check_random_state(random_state)

    def execute(self, instances):
        instances = check_instances(instances)

        if len(instances) <= self.training_size:
            return self._build_buffer(instances, min(len(instances), self.buffer_size))

        offline_data = instances[:self.training_size]
        online_data = instances[self.training_size:]

        buffer = self._build_buffer(offline_data, min(self.training_size, self.buffer_size))

        for instance in online_data:
            self._process(instance, buffer)

        return buffer

    def _build_buffer(self, instances, n_clusters):
        return KMeansPlusPlus(n_clusters, random_state=self._rng).execute(instances)

    def _process(self, instance, buffer):
        closest = find_closest_cluster(instance, buffer)
        distance = closest.distance(instance)

        if closest.n > 1:
            radius = 2 * closest.get_standard_deviation()
        else:
            # singletons have no spread, the distance to the next closest microcluster stands for their radius
            neighbour = find_closest_cluster(closest, [mc for mc in buffer if mc is not closest])
            radius = closest.distance(neighbour) if neighbour is not None else 0.0

        if distance < radius:
            closest.absorb(instance)
        else:
            self._add_microcluster(MicroCluster(instance), buffer)

    @staticmethod
    def _add_microcluster(microcluster, buffer):
        closest_pair = None
        min_distance = float("inf")

        for i in range(len(buffer)):
            for j in range(i + 1, len(buffer)):
                distance = buffer[i].distance(buffer[j])
                if distance < min_distance:
                    min_distance = distance
                    closest_pair = (buffer[i], buffer[j])

        if closest_pair is not None:
            m1, m2 = closest_pair
            buffer.remove(m1)
            buffer.remove(m2)
            buffer.append(MicroCluster.merge(m1, m2))

        buffer.append(microcluster)

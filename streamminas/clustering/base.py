import abc
import numpy as np

from streamminas.exceptions import PreconditionError
from streamminas.utils.cluster_utils import get_closest_clusters
from streamminas.utils.data_structure import MicroCluster

__all__ = ["ClusteringAlgorithm"]

class ClusteringAlgorithm(abc.ABC):
    """Strategy turning a batch of instances into microclusters. Used both to initialize the model and to detect novelties."""

    @abc.abstractmethod
    def execute(self, instances):
        """Clusters the given instances.

        Parameters
        ----------
        instances : list of Instance
            Instances to cluster, in arrival order

        Returns
        -------
        list of MicroCluster
            One microcluster per non-empty cluster found
        """

def check_instances(instances):
    instances = list(instances)
    if len(instances) == 0:
        raise PreconditionError("Cannot cluster an empty batch of instances")
    return instances

def to_microclusters(instances, labels, n_clusters):
    """Builds one microcluster per non-empty cluster, in cluster index order. Empty clusters are discarded."""
    microclusters = []
    for cluster_index in range(n_clusters):
        members = [instances[i] for i in np.flatnonzero(labels == cluster_index)]
        if members:
            microclusters.append(MicroCluster(members))

    return microclusters

def lloyd(X, centroids, max_iter=None):
    """Lloyd refinement: assigns every point to its closest centroid then moves each centroid to the mean of its points,
    until the centroids stop changing.

    Convergence is tested with exact equality. `max_iter` bounds the number of iterations when given.

    Parameters
    ----------
    X : numpy.ndarray
        Points
    centroids : numpy.ndarray
        Initial centroids
    max_iter : int, optional
        Maximum number of iterations, unbounded if None

    Returns
    -------
    numpy.ndarray
        Final centroids
    numpy.ndarray
        Index of the centroid each point is assigned to
    int
        Number of iterations run
    """
    centroids = np.array(centroids, dtype=float)
    n_iter = 0

    while True:
        labels, _ = get_closest_clusters(X, centroids)
        new_centroids = centroids.copy()

        for i in range(len(centroids)):
            members = X[labels == i]
            if len(members) > 0:  # empty clusters keep their centroid
                new_centroids[i] = members.sum(axis=0) / len(members)

        n_iter += 1
        converged = np.array_equal(new_centroids, centroids)
        centroids = new_centroids

        if converged or (max_iter is not None and n_iter >= max_iter):
            return centroids, labels, n_iter

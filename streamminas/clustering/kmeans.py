import numpy as np

from streamminas.clustering.base import ClusteringAlgorithm, check_instances, lloyd, to_microclusters
from streamminas.exceptions import ConfigurationError, PreconditionError
from streamminas.utils.cluster_utils import get_closest_clusters

__all__ = ["KMeans"]

class KMeans(ClusteringAlgorithm):
    """K-Means with deterministic farthest-point seeding.

    The first point is the first centroid, every following centroid is the point farthest from its closest
    already chosen centroid. Centroids are then refined until they stop changing.

    Parameters
    ----------
    n_clusters : int
        Number of clusters to generate
    max_iter : int, optional
        Maximum number of refinement iterations. None iterates until exact convergence.

    Attributes
    ----------
    cluster_centers_ : numpy.ndarray
        Array containing the coordinates of the cluster centers
    labels_ : numpy.ndarray
        Labels of each point
    n_iter_ : int
        Number of refinement iterations run
    """
    def __init__(self, n_clusters=8, max_iter=None):
        if n_clusters <= 0:
            raise ConfigurationError(f"n_clusters must be positive, got {n_clusters}")

        self.n_clusters = n_clusters
        self.max_iter = max_iter

    def fit(self, X):
        """Compute K-Means clustering.

        Parameters
        ----------
        X : numpy.ndarray
            Samples

        Returns
        -------
        KMeans
            Fitted estimator
        """
        X = np.asarray(X, dtype=float)
        if len(X) == 0:
            raise PreconditionError("Cannot fit KMeans on zero samples")

        centroids = self._init_centroids(X)
        self.cluster_centers_, self.labels_, self.n_iter_ = lloyd(X, centroids, self.max_iter)

        return self

    def predict(self, X):
        """Predict the closest cluster each sample in X belongs to.

        Parameters
        ----------
        X : numpy.ndarray
            Samples to predict

        Returns
        -------
        numpy.ndarray
            Index of the cluster each sample belongs to
        """
        labels, _ = get_closest_clusters(np.asarray(X, dtype=float), self.cluster_centers_)

        return labels

    def fit_predict(self, X):
        """Compute cluster centers and predict cluster index for each sample. Convenience method; equivalent to calling fit(X) followed by predict(X).

        Parameters
        ----------
        X : numpy.ndarray
            Samples

        Returns
        -------
        numpy.ndarray
            Index of the cluster each sample belongs to
        """
        return self.fit(X).labels_

    def execute(self, instances):
        instances = check_instances(instances)
        labels = self.fit_predict(np.array([instance.x for instance in instances]))

        return to_microclusters(instances, labels, self.n_clusters)

    def _init_centroids(self, X):
        centroids = [X[0]]

        for _ in range(1, self.n_clusters):
            _, distances = get_closest_clusters(X, centroids)
            # argmax keeps the first point on ties, hence X[0] when every distance is null
            centroids.append(X[np.argmax(distances)])

        return np.array(centroids)

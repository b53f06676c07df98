import numpy as np
from sklearn.utils import check_random_state

from streamminas.clustering.kmeans import KMeans
from streamminas.utils.cluster_utils import get_closest_clusters

__all__ = ["KMeansPlusPlus"]

class KMeansPlusPlus(KMeans):
    """K-Means seeded with the K-Means++ strategy.

    The first centroid is drawn uniformly, every following centroid is drawn with a probability proportional to
    the squared distance between a point and its closest already chosen centroid.

    Parameters
    ----------
    n_clusters : int
        Number of clusters to generate
    random_state : int, numpy.random.RandomState or None
        Source of randomness for the seeding. The same source is reused across calls, a fixed seed makes the
        sequence of clusterings reproducible.
    max_iter : int, optional
        Maximum number of refinement iterations. None iterates until exact convergence.
    """
    def __init__(self, n_clusters=8, random_state=None, max_iter=None):
        super().__init__(n_clusters, max_iter)
        self.random_state = random_state
        self._rng = check_random_state(random_state)

    def _init_centroids(self, X):
        centroids = [X[self._rng.randint(len(X))]]

        for _ in range(1, self.n_clusters):
            _, distances = get_closest_clusters(X, centroids)
            weights = np.square(distances)
            total = weights.sum()

            if total > 0:
                index = self._rng.choice(len(X), p=weights / total)
            else:  # every point is already a centroid
                index = self._rng.randint(len(X))

            centroids.append(X[index])

        return np.array(centroids)

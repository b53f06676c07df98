import numpy as np
import math

__all__ = ["get_closest_clusters", "find_closest_cluster", "calculate_silhouette"]

#Constant used to determine the maximum number of rows used by numpy for the computation of the closest clusters. A higher number is faster but takes more memory.
MAX_MEMORY_SIZE = 50000

def get_closest_clusters(X, centroids):
    """Function returning the closest centroid and distance for each given point.
    Ties are resolved in favor of the centroid appearing first.

    Parameters
    ----------
    X : numpy.ndarray
        Array of points
    centroids : numpy.ndarray
        Array of centroids

    Returns
    -------
    numpy.ndarray
        Index of the closest cluster for each point, -1 if there are no centroids
    numpy.ndarray
        Distance to the closest cluster for each point, infinity if there are no centroids
    """
    if len(centroids) == 0:
        return np.full(len(X), -1), np.full(len(X), np.inf)

    centroids = np.array(centroids)
    norm_dists = np.zeros((X.shape[0],centroids.shape[0]))

    # Cut into batches if there are too many samples to save on memory
    for idx in range(math.ceil(X.shape[0]/MAX_MEMORY_SIZE)):
        sl = slice(idx*MAX_MEMORY_SIZE, (idx+1)*MAX_MEMORY_SIZE)
        norm_dists[sl] = np.linalg.norm(np.subtract(X[sl, :, None], np.transpose(centroids)), axis=1)

    return np.argmin(norm_dists, axis=1), np.amin(norm_dists, axis=1)

def find_closest_cluster(target, clusters):
    """Linear scan for the microcluster whose centroid is the closest to `target`.
    The first microcluster reaching the minimum distance wins ties.

    Parameters
    ----------
    target : Point, Instance or MicroCluster
        Point or microcluster to locate
    clusters : list of MicroCluster
        Candidates, scanned in iteration order

    Returns
    -------
    MicroCluster
        Closest microcluster, None if `clusters` is empty
    """
    if len(clusters) == 0:
        return None

    return min(clusters, key=lambda cl: cl.distance(target))

def calculate_silhouette(cluster, clusters):
    """Computes the simplified silhouette of a candidate microcluster against a reference set.

    'a' is the standard deviation of the candidate and 'b' is the distance between its centroid and the closest
    centroid of the reference set. The result is (b - a) / max(a, b).

    Parameters
    ----------
    cluster : MicroCluster
        Candidate microcluster
    clusters : list of MicroCluster
        Reference microclusters

    Returns
    -------
    float
        Silhouette in [-1, 1]. 1 if the reference set is empty. 0 if both a and b are null, so a zero-spread candidate
        sitting on an existing centroid is never cohesive instead of yielding an undefined NaN ratio.
    """
    closest = find_closest_cluster(cluster, clusters)
    if closest is None:
        # b is infinite
        return 1.0

    a = cluster.get_standard_deviation()
    b = cluster.distance(closest)

    if max(a, b) == 0:  # 0 / 0, rejected rather than NaN
        return 0.0

    return (b - a) / max(a, b)

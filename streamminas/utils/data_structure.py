import numpy as np
from collections import OrderedDict, namedtuple
from enum import Enum

from streamminas.exceptions import PreconditionError
from streamminas.utils.cluster_utils import calculate_silhouette

__all__ = ["Point", "Instance", "Category", "MicroCluster", "Labeling", "Classification", "TemporaryMemory"]


Labeling = namedtuple("Labeling", ["timestamp", "label", "is_novelty"])
Labeling.__doc__ = """Externally visible output of the online phase: the label given to the sample observed at `timestamp`."""

Classification = namedtuple("Classification", ["closest", "explained"])
Classification.__doc__ = """Result of a decision rule: the closest microcluster found (None if the reference set was empty) and whether it explains the target."""


class Category(Enum):
    """Category of a microcluster, either learned in the offline phase or discovered as a novelty pattern."""
    KNOWN = "known"
    NOVELTY = "novelty"


def _as_array(X):
    if isinstance(X, Point):
        return X.x
    if isinstance(X, MicroCluster):
        return X.centroid
    if not isinstance(X, np.ndarray):
        return np.array(X, dtype=float)
    return X


class Point(object):
    """Immutable point with a fixed number of dimensions.

    Parameters
    ----------
    x : array-like
        Coordinates of the point, copied into a read-only numpy array

    Attributes
    ----------
    x : numpy.ndarray
        Coordinates of the point
    """
    def __init__(self, x):
        x = np.array(x, dtype=float)
        x.setflags(write=False)
        self.x = x

    def __len__(self):
        return len(self.x)

    def __getitem__(self, i):
        return self.x[i]

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return np.array_equal(self.x, other.x)

    def __hash__(self):
        return hash(self.x.tobytes())

    def __repr__(self):
        return f"Point({self.x.tolist()})"

    def distance(self, other):
        """Returns the euclidean distance between this point and another point, array or microcluster centroid.

        Parameters
        ----------
        other : Point, MicroCluster or numpy.ndarray

        Returns
        -------
        float
            Euclidean distance
        """
        return float(np.linalg.norm(self.x - _as_array(other)))

    @staticmethod
    def add(p1, p2):
        return Point(p1.x + p2.x)

    @staticmethod
    def divide(point, scalar):
        return Point(point.x / scalar)

    @staticmethod
    def calculate_centroid(points):
        """Returns the mean point of a non-empty collection of points.

        Raises
        ------
        PreconditionError
            If no point is given
        """
        if len(points) == 0:
            raise PreconditionError("Cannot compute the centroid of zero points")

        total = points[0]
        for point in points[1:]:
            total = Point.add(total, point)

        return Point.divide(total, len(points))


class Instance(Point):
    """A point received from the stream, with its true label and arrival timestamp.

    Parameters
    ----------
    x : array-like
        Coordinates of the point
    label : str or int
        True label of the sample. May be a sentinel (e.g. None) when unknown at inference time.
    timestamp : int
        Arrival timestamp. Timestamps are unique and increasing over the whole stream.
    """
    def __init__(self, x, label, timestamp):
        super().__init__(x)
        self.label = label
        self.timestamp = timestamp

    def __eq__(self, other):
        if not isinstance(other, Instance):
            return NotImplemented
        return self.timestamp == other.timestamp and np.array_equal(self.x, other.x)

    def __hash__(self):
        return hash((self.x.tobytes(), self.timestamp))

    def __repr__(self):
        return f"Instance({self.x.tolist()}, label={self.label!r}, timestamp={self.timestamp})"


class MicroCluster(object):
    """A representation of a cluster with compressed information.

    Parameters
    ----------
    instances : Instance or list of Instance, optional
        Instances folded into the microcluster at creation. Must not be empty if given.
    label : str or int
        Label associated with this microcluster
    category : Category
        Whether the microcluster represents a known class or a novelty pattern

    Attributes
    ----------
    n : int
        Number of instances absorbed by this microcluster
    linear_sum : numpy.ndarray
        Per-dimension linear sum of the absorbed points
    squared_sum : numpy.ndarray
        Per-dimension sum of the squares of the absorbed points
    timestamps : set of int
        Timestamps of the absorbed instances
    timestamp : int
        Timestamp this microcluster was last updated, used by the forgetting mechanism
    """

    def __init__(self,
                 instances=None,
                 label=None,
                 category=Category.KNOWN):

        self.label = label
        self.category = category
        self.n = 0
        self.linear_sum = None
        self.squared_sum = None
        self.timestamps = set()
        self.timestamp = 0

        if instances is not None:
            if isinstance(instances, Instance):
                instances = [instances]
            if len(instances) == 0:
                raise PreconditionError("Cannot build a microcluster from zero instances")

            dimensions = len(instances[0])
            self.linear_sum = np.zeros(dimensions)
            self.squared_sum = np.zeros(dimensions)

            for instance in instances:
                self.absorb(instance)

    def __str__(self):
        """Returns string representation of a microcluster.

        Returns
        -------
        str
            String representation of microcluster
        """

        return f"""Target class {self.label} ({self.category.value})
                # of instances: {self.n}
                Linear sum: {self.linear_sum}
                Squared sum: {self.squared_sum}
                Centroid: {self.centroid}
                Standard deviation: {self.get_standard_deviation()}
                Timestamp of last change: {self.timestamp}"""

    def small_str(self):
        """Returns string representation of a microcluster.

        Returns
        -------
        str
            Small string representation of microcluster
        """

        return f"""Target class {self.label} ({self.category.value})
                # of instances: {self.n}
                Timestamp of last change: {self.timestamp}"""

    @property
    def centroid(self):
        """numpy.ndarray: Per-dimension mean of the absorbed points."""
        if self.n == 0:
            raise PreconditionError("Cannot compute the centroid of an empty microcluster")
        return self.linear_sum / self.n

    def get_standard_deviation(self):
        """Returns the standard deviation of the microcluster, the square root of the summed per-dimension variances.

        Returns
        -------
        float
            Standard deviation of the microcluster
        """
        mean = self.linear_sum / self.n
        variance = np.sum(self.squared_sum / self.n - np.square(mean))
        # rounding can push a null variance slightly below zero
        return float(np.sqrt(max(variance, 0.0)))

    def distance(self, other):
        """Returns the euclidean distance between this microcluster's centroid and another microcluster's centroid or a point.

        Parameters
        ----------
        other : MicroCluster, Point or numpy.ndarray

        Returns
        -------
        float
            Euclidean distance
        """
        return float(np.linalg.norm(self.centroid - _as_array(other)))

    def absorb(self, instance):
        """Adds the instance to the summary: updates the sums, the count and the member timestamps.

        Parameters
        ----------
        instance : Instance
        """
        self.linear_sum = self.linear_sum + instance.x
        self.squared_sum = self.squared_sum + np.square(instance.x)
        self.n += 1
        self.timestamps.add(instance.timestamp)
        self.update_timestamp(instance)

    def update_timestamp(self, instance):
        self.timestamp = instance.timestamp

    def update_cluster(self, instance, update_summary):
        """Registers an instance explained by this cluster.

        Parameters
        ----------
        instance : Instance
            The explained instance
        update_summary : bool
            Whether the instance is absorbed into the summary or only refreshes its timestamp
        """
        if update_summary:
            self.absorb(instance)
        else:
            self.update_timestamp(instance)

    @staticmethod
    def merge(m1, m2):
        """Returns a new microcluster summing the statistics of both operands.

        The label and category are inherited from `m1`. Member timestamps are not carried over,
        only instances absorbed afterwards are recorded.

        Parameters
        ----------
        m1 : MicroCluster
        m2 : MicroCluster

        Returns
        -------
        MicroCluster
            The merged microcluster
        """
        merged = MicroCluster(label=m1.label, category=m1.category)
        merged.n = m1.n + m2.n
        merged.linear_sum = m1.linear_sum + m2.linear_sum
        merged.squared_sum = m1.squared_sum + m2.squared_sum
        merged.timestamp = max(m1.timestamp, m2.timestamp)
        return merged

    def is_cohesive(self, clusters):
        """Verifies if this cluster is cohesive for novelty detection purposes.
        A new micro-cluster is cohesive if its silhouette coefficient against the given microclusters is larger than 0.

        Parameters
        ----------
        clusters : List of MicroCluster
            Existing known micro-clusters

        Returns
        -------
        bool
            If the cluster is cohesive (silhouette>0) or not
        """
        return calculate_silhouette(self, clusters) > 0

    def is_representative(self, min_examples):
        """Verifies if this cluster is representative for novelty detection purposes.
        A new micro-cluster is representative if it contains a minimal number of examples,
        where this number is a user-defined parameter.

        Parameters
        ----------
        min_examples : int
            The number of samples the microcluster needs to have to be considered representative.

        Returns
        -------
        bool
            If the cluster is representative or not
        """
        return self.n >= min_examples


class TemporaryMemory:
    """Buffer of the instances that could not be explained, kept in arrival order and indexed by timestamp.

    Attributes
    ----------
    instances : collections.OrderedDict
        Instances keyed by their (unique) timestamp
    """
    def __init__(self):
        self.instances = OrderedDict()

    def append(self, instance):
        """Adds an element to the data structure

        Parameters
        ----------
        instance : Instance
            Element to add
        """
        self.instances[instance.timestamp] = instance

    def remove(self, timestamps):
        """Removes the instances whose timestamp is in `timestamps`.

        Parameters
        ----------
        timestamps : set of int

        Returns
        -------
        list of Instance
            The removed instances, in arrival order
        """
        removed = [instance for t, instance in self.instances.items() if t in timestamps]
        for instance in removed:
            del self.instances[instance.timestamp]

        return removed

    def forget(self, current_timestamp, lifespan):
        """Removes the instances older than `lifespan` at `current_timestamp`.

        Returns
        -------
        list of Instance
            The removed instances
        """
        expired = {t for t in self.instances if current_timestamp - t > lifespan}
        return self.remove(expired)

    def get_all_instances(self):
        """Returns all instances within the data structure

        Returns
        -------
        list of Instance
            All instances, in arrival order
        """
        return list(self.instances.values())

    def __contains__(self, timestamp):
        return timestamp in self.instances

    def __iter__(self):
        return iter(list(self.instances.values()))

    def __len__(self):
        return len(self.instances)

import abc

from streamminas.utils.cluster_utils import find_closest_cluster
from streamminas.utils.data_structure import Classification

__all__ = ["DataInstanceDecisionRule", "StandardDeviationRule"]

class DataInstanceDecisionRule(abc.ABC):
    """Decides whether an instance is explained by its closest microcluster."""

    @abc.abstractmethod
    def classify(self, instance, microclusters):
        """Classifies an instance against a set of microclusters.

        Parameters
        ----------
        instance : Instance
            Instance to classify
        microclusters : list of MicroCluster
            Reference microclusters

        Returns
        -------
        Classification
            Closest microcluster and whether it explains the instance. Never explained if `microclusters` is empty.
        """

class StandardDeviationRule(DataInstanceDecisionRule):
    """The instance is explained if its distance to the closest centroid is at most `factor` times the standard
    deviation of the closest microcluster.

    Parameters
    ----------
    factor : float
        Factor applied to the standard deviation
    """
    def __init__(self, factor):
        self.factor = factor

    def classify(self, instance, microclusters):
        closest = find_closest_cluster(instance, microclusters)
        if closest is None:
            return Classification(None, False)

        distance = closest.distance(instance)

        return Classification(closest, distance <= self.factor * closest.get_standard_deviation())

import abc
import numpy as np

from streamminas.exceptions import ConfigurationError
from streamminas.utils.cluster_utils import find_closest_cluster
from streamminas.utils.data_structure import Classification

__all__ = [
    "MicroClusterDecisionRule",
    "StandardDeviationThreshold",
    "MaxDistanceThreshold",
    "MeanDistanceThreshold",
    "SummedDeviationThreshold",
    "get_microcluster_decision_rule",
]

class MicroClusterDecisionRule(abc.ABC):
    """Decides whether a candidate microcluster extends the closest microcluster of a reference set.

    Subclasses only provide the threshold, the candidate is explained if the distance between both centroids is
    strictly below it.
    """

    def classify(self, target, microclusters):
        """Classifies a candidate microcluster against a set of microclusters.

        Parameters
        ----------
        target : MicroCluster
            Candidate microcluster
        microclusters : list of MicroCluster
            Reference microclusters

        Returns
        -------
        Classification
            Closest microcluster and whether it explains the candidate. Never explained if `microclusters` is empty.
        """
        closest = find_closest_cluster(target, microclusters)
        if closest is None:
            return Classification(None, False)

        threshold = self.threshold(target, closest, microclusters)

        return Classification(closest, closest.distance(target) < threshold)

    @abc.abstractmethod
    def threshold(self, target, closest, microclusters):
        """Returns the distance under which `target` is considered an extension of `closest`."""

    @staticmethod
    def _same_identity(closest, microclusters):
        return [mc for mc in microclusters if mc.label == closest.label and mc.category == closest.category]

class StandardDeviationThreshold(MicroClusterDecisionRule):
    """Threshold is `factor` times the standard deviation of the closest microcluster (TV1 in the MINAS paper).

    Parameters
    ----------
    factor : float
        Factor applied to the standard deviation
    """
    def __init__(self, factor):
        self.factor = factor

    def threshold(self, target, closest, microclusters):
        return self.factor * closest.get_standard_deviation()

class MaxDistanceThreshold(StandardDeviationThreshold):
    """Threshold is the largest distance between the closest microcluster and the other microclusters sharing its
    label and category (TV2). Falls back to the standard deviation threshold if none does.
    """
    def threshold(self, target, closest, microclusters):
        distances = [closest.distance(mc) for mc in self._same_identity(closest, microclusters) if mc is not closest]

        if not distances:
            return super().threshold(target, closest, microclusters)

        return max(distances)

class MeanDistanceThreshold(StandardDeviationThreshold):
    """Threshold is the mean distance between the closest microcluster and every microcluster sharing its label and
    category, the closest one included with a null distance (TV3). Falls back to the standard deviation threshold
    if no other microcluster shares its identity.
    """
    def threshold(self, target, closest, microclusters):
        same_identity = self._same_identity(closest, microclusters)

        if not any(mc is not closest for mc in same_identity):
            return super().threshold(target, closest, microclusters)

        return float(np.mean([closest.distance(mc) for mc in same_identity]))

class SummedDeviationThreshold(MicroClusterDecisionRule):
    """Threshold is the sum of the standard deviations of the closest microcluster and of the candidate."""

    def threshold(self, target, closest, microclusters):
        return closest.get_standard_deviation() + target.get_standard_deviation()

def get_microcluster_decision_rule(strategy, factor=1.1):
    """Returns the microcluster decision rule matching a threshold strategy number.

    Parameters
    ----------
    strategy : int
        1, 2 or 3 for the TV1, TV2 and TV3 thresholds of the MINAS paper, 4 for the summed standard deviations
    factor : float
        Factor of the standard deviation threshold, ignored by strategy 4

    Returns
    -------
    MicroClusterDecisionRule
    """
    if strategy == 1:
        return StandardDeviationThreshold(factor)
    elif strategy == 2:
        return MaxDistanceThreshold(factor)
    elif strategy == 3:
        return MeanDistanceThreshold(factor)
    elif strategy == 4:
        return SummedDeviationThreshold()

    raise ConfigurationError(f"Unknown threshold strategy {strategy}, available strategies: 1, 2, 3, 4")

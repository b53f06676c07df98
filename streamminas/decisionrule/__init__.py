"""Decision rules classifying instances and microclusters against a set of microclusters"""
from .datainstance import DataInstanceDecisionRule, StandardDeviationRule
from .microcluster import (
    MaxDistanceThreshold,
    MeanDistanceThreshold,
    MicroClusterDecisionRule,
    StandardDeviationThreshold,
    SummedDeviationThreshold,
    get_microcluster_decision_rule,
)

__all__ = [
    "DataInstanceDecisionRule",
    "StandardDeviationRule",
    "MicroClusterDecisionRule",
    "StandardDeviationThreshold",
    "MaxDistanceThreshold",
    "MeanDistanceThreshold",
    "SummedDeviationThreshold",
    "get_microcluster_decision_rule",
]

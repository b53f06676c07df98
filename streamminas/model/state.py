from streamminas.utils.data_structure import TemporaryMemory

__all__ = ["MinasModel"]

class MinasModel:
    """Mutable state of a MINAS model, updated in place by `process`.

    A microcluster belongs either to the decision model or to the sleep memory, never both.

    Parameters
    ----------
    decision_model : list of MicroCluster
        Initial decision model
    confusion_matrix : DynamicConfusionMatrix
        Evaluation matrix seeded with the known labels

    Attributes
    ----------
    decision_model : list of MicroCluster
        Microclusters used to classify the incoming instances
    sleep_memory : list of MicroCluster
        Inactive microclusters, only used to recognize extensions of dormant concepts
    temporary_memory : TemporaryMemory
        Unexplained instances waiting for the novelty detection process
    last_timestamp : int
        Timestamp of the last processed instance
    novelty_count : int
        Number of novelty patterns discovered, the next novelty is labeled with its value
    confusion_matrix : DynamicConfusionMatrix
        Evaluation matrix
    """
    def __init__(self, decision_model, confusion_matrix):
        self.decision_model = decision_model
        self.sleep_memory = []
        self.temporary_memory = TemporaryMemory()
        self.last_timestamp = 0
        self.novelty_count = 0
        self.confusion_matrix = confusion_matrix

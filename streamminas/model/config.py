__all__ = ["MinasConfiguration"]

class MinasConfiguration:
    """Parameters of the MINAS online process.

    Parameters
    ----------
    clustering_for_initialization : ClusteringAlgorithm
        Clustering applied to the instances of each class in the offline phase
    clustering_for_novelty_detection : ClusteringAlgorithm
        Clustering applied to the temporary memory during novelty detection
    microcluster_decision_rule : MicroClusterDecisionRule
        Decides if a candidate microcluster extends an existing (active or sleeping) one
    data_instance_decision_rule : DataInstanceDecisionRule
        Decides if an instance is explained by the decision model
    temporary_memory_max_size : int
        Size of the temporary memory that triggers the novelty detection process
    minimum_cluster_size : int
        Minimum number of instances a candidate microcluster needs to be kept
    window_size : int
        Period, in timestamps, of the forgetting mechanism
    microcluster_lifespan : int
        Age after which an inactive microcluster is moved to the sleep memory
    instance_lifespan : int
        Age after which an unexplained instance is dropped from the temporary memory
    is_incremental : bool
        Whether explained instances are absorbed by their microcluster or only refresh its timestamp
    verbose : int
        Controls the level of verbosity, the higher, the more messages are displayed. Can be '0', '1', or '2'.
    """
    def __init__(self,
                 clustering_for_initialization,
                 clustering_for_novelty_detection,
                 microcluster_decision_rule,
                 data_instance_decision_rule,
                 temporary_memory_max_size,
                 minimum_cluster_size,
                 window_size,
                 microcluster_lifespan,
                 instance_lifespan,
                 is_incremental,
                 verbose=0):
        self.clustering_for_initialization = clustering_for_initialization
        self.clustering_for_novelty_detection = clustering_for_novelty_detection
        self.microcluster_decision_rule = microcluster_decision_rule
        self.data_instance_decision_rule = data_instance_decision_rule
        self.temporary_memory_max_size = temporary_memory_max_size
        self.minimum_cluster_size = minimum_cluster_size
        self.window_size = window_size
        self.microcluster_lifespan = microcluster_lifespan
        self.instance_lifespan = instance_lifespan
        self.is_incremental = is_incremental
        self.verbose = verbose

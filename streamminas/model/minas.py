import numpy as np
import pandas as pd

from river import base
from sklearn.exceptions import NotFittedError

from streamminas.clustering import CluStream, KMeans, KMeansPlusPlus
from streamminas.decisionrule import StandardDeviationRule, get_microcluster_decision_rule
from streamminas.exceptions import ConfigurationError
from streamminas.model.config import MinasConfiguration
from streamminas.model.engine import initialize_model, process
from streamminas.utils.data_structure import Instance

__all__ = ["Minas"]

class Minas(base.MiniBatchClassifier):
    """Implementation of the MINAS algorithm for novelty detection. [1]

    [1] de Faria, Elaine Ribeiro, André Carlos Ponce de Leon Ferreira Carvalho, and Joao Gama. "MINAS: multiclass learning algorithm for novelty detection in data streams."
    Data mining and knowledge discovery 30 (2016): 640-680.

    Parameters
    ----------
    kini : int
        Number of K clusters for the clustering algorithm, also the buffer size of CluStream
    cluster_algorithm : str
        String containing the clustering algorithm to use, supports 'kmeans', 'kmeans++' and 'clustream'
    random_state : int
        Seed for the random number generation. Makes the algorithm deterministic if a number is provided.
    min_short_mem_trigger : int
        Minimum number of samples in the short term memory to trigger the novelty detection process
    min_examples_cluster : int
        Minimum number of samples to from a cluster
    threshold_strategy : int
        Strategy to use to compute the threshold of the microcluster decision rule. Can be '1', '2', '3' as
        described in the MINAS paper, or '4' for the sum of the standard deviations.
    threshold_factor : float
        Factor for the threshold computation
    radius_factor : float
        Factor applied to the standard deviation of a microcluster to decide if it explains a sample
    window_size : int
        Number of samples used by the forgetting mechanism
    microcluster_lifespan : int
        Number of samples after which an inactive microcluster is put to sleep, defaults to window_size
    instance_lifespan : int
        Number of samples after which an unknown sample is forgotten, defaults to window_size
    clustream_training_size : int
        Number of samples CluStream summarizes with K-Means++ before processing the others online
    update_summary : bool
        Whether or not the microcluster's properties are updated when a new point is added to it
    verbose : int
        Controls the level of verbosity, the higher, the more messages are displayed. Can be '1', or '2'.

    Attributes
    ----------
    before_offline_phase : bool
        Whether or not the algorithm was initialized (offline phase). The algorithm needs to first be initialized to be used in an online fashion.
    config : MinasConfiguration
        Configuration built from the parameters
    model : MinasModel
        State of the model, None before the offline phase
    labelings : list of Labeling
        Every labeling produced during the online phase, delayed ones included
    sample_counter : int
        Number of samples treated, used as timestamp
    """

    ACCEPTED_ALGORITHMS = ['kmeans', 'kmeans++', 'clustream']

    def __init__(self,
                 kini=3,
                 cluster_algorithm='kmeans',
                 random_state=None,
                 min_short_mem_trigger=10,
                 min_examples_cluster=10,
                 threshold_strategy=1,
                 threshold_factor=1.1,
                 radius_factor=2.0,
                 window_size=100,
                 microcluster_lifespan=None,
                 instance_lifespan=None,
                 clustream_training_size=100,
                 update_summary=False,
                 verbose=0):
        super().__init__()
        if cluster_algorithm not in self.ACCEPTED_ALGORITHMS:
            raise ConfigurationError('Available algorithms: {}'.format(', '.join(self.ACCEPTED_ALGORITHMS)))

        self.kini = kini
        self.cluster_algorithm = cluster_algorithm
        self.random_state = random_state
        self.min_short_mem_trigger = min_short_mem_trigger
        self.min_examples_cluster = min_examples_cluster
        self.threshold_strategy = threshold_strategy
        self.threshold_factor = threshold_factor
        self.radius_factor = radius_factor
        self.window_size = window_size
        self.microcluster_lifespan = microcluster_lifespan
        self.instance_lifespan = instance_lifespan
        self.clustream_training_size = clustream_training_size
        self.update_summary = update_summary
        self.verbose = verbose

        self.config = MinasConfiguration(
            clustering_for_initialization=self._make_clustering(),
            clustering_for_novelty_detection=self._make_clustering(),
            microcluster_decision_rule=get_microcluster_decision_rule(threshold_strategy, threshold_factor),
            data_instance_decision_rule=StandardDeviationRule(radius_factor),
            temporary_memory_max_size=min_short_mem_trigger,
            minimum_cluster_size=min_examples_cluster,
            window_size=window_size,
            microcluster_lifespan=window_size if microcluster_lifespan is None else microcluster_lifespan,
            instance_lifespan=window_size if instance_lifespan is None else instance_lifespan,
            is_incremental=update_summary,
            verbose=verbose)

        self.model = None
        self.labelings = []
        self.sample_counter = 0
        self.before_offline_phase = True

    @property
    def novelty_count(self):
        return self._fitted_model().novelty_count

    @property
    def last_timestamp(self):
        return self._fitted_model().last_timestamp

    def learn_one(self, x, y, w=1.0):
        """Function used by river algorithms to learn one sample. It is not applicable to this algorithm since the offline phase requires all samples
        to arrive at once. It is only added as to follow River's API.

        Parameters
        ----------
        x : dict
            Sample
        y : int
            Label of the given sample
        w : float, optional
            Weight, not used, by default 1.0
        """
        # Not applicable
        pass

    def learn_many(self, X, y, w=1.0):
        """Represents the offline phase of the algorithm. Receives a number of samples and their given labels and learns all of the known classes.

        Parameters
        ----------
        X : pandas.DataFrame or numpy.ndarray
            Samples to be learned by the model
        y : list of int
            Labels corresponding to the given samples, must be the same length as the number of samples
        w : float, optional
            Weights, not used, by default 1.0

        Returns
        -------
        Minas
            Fitted estimator
        """
        X = self._to_numpy(X)
        y = list(y)

        training_set = []
        for i in range(len(X)):
            self.sample_counter += 1
            training_set.append(Instance(X[i], y[i], self.sample_counter))

        self.model = initialize_model(training_set, self.config)
        self.before_offline_phase = False

        return self

    def predict_one(self, X, y=None):
        """Represents the online phase. Equivalent to predict_many() with only one sample.

        Parameters
        ----------
        X : dict
            Sample
        y : int
            True y value of the sample, if available. Only used for metric evaluation.

        Returns
        -------
        numpy.ndarray
            Label predicted for the given sample, predicts -1 if labeled as unknown
        """
        return self.predict_many(np.array(list(X.values()))[None,:], [y])

    def predict_many(self, X, y=None):
        """Represents the online phase. Receives multiple samples, for each sample predict its label and adds it to the cluster if it is a known class.
        Otherwise, if it's unknown, it is added to the short term memory and novelty detection is performed once the trigger has been reached (min_short_mem_trigger).
        The labels given later to samples held in the short term memory are available in `labelings`.

        Parameters
        ----------
        X : pandas.DataFrame or numpy.ndarray
            Samples
        y : list of int
            True y values of the samples, if available. Only used for metric evaluation.

        Returns
        -------
        numpy.ndarray
            Array of length len(X) containing the predicted labels, predicts -1 if the corresponding sample labeled as unknown

        Raises
        ------
        sklearn.exceptions.NotFittedError
            If the model has not been trained first with learn_many() (offline phase)
        """
        model = self._fitted_model()
        X = self._to_numpy(X)

        pred_label = []

        for i in range(len(X)):
            self.sample_counter += 1
            y_true = y[i] if y is not None else None

            labelings = process(Instance(X[i], y_true, self.sample_counter), model, self.config)
            self.labelings.extend(labelings)

            current = [labeling.label for labeling in labelings if labeling.timestamp == self.sample_counter]
            pred_label.append(current[0] if current else -1)

        return np.array(pred_label, dtype=object)

    def get_unknown_rate(self):
        """Returns the unknown rate (UnkR), the mean over the true classes of the percentage of their samples left unknown.

        Returns
        -------
        float
            Unknown rate
        """
        return self._fitted_model().confusion_matrix.measure_unkr()

    def get_combined_error_rate(self):
        """Returns the combined error rate (CER) of the samples explained so far.

        Returns
        -------
        float
            Combined error rate
        """
        return self._fitted_model().confusion_matrix.measure_cer()

    def predict_proba_one(self, X):
        #Function used by river algorithms to get the probability of the prediction. It is not applicable to this algorithm since it only predicts labels.
        #It is only added as to follow River's API.
        pass

    def predict_proba_many(self, X):
        #Function used by river algorithms to get the probability of the predictions. It is not applicable to this algorithm since it only predicts labels.
        #It is only added as to follow River's API.
        pass

    def _fitted_model(self):
        if self.before_offline_phase:
            raise NotFittedError("Model must be fitted first")
        return self.model

    def _make_clustering(self):
        if self.cluster_algorithm == 'kmeans':
            return KMeans(self.kini)
        elif self.cluster_algorithm == 'kmeans++':
            return KMeansPlusPlus(self.kini, random_state=self.random_state)
        return CluStream(self.clustream_training_size, self.kini, random_state=self.random_state)

    @staticmethod
    def _to_numpy(X):
        if isinstance(X, pd.DataFrame):
            X = X.to_numpy() #Converting DataFrame to numpy array
        return np.asarray(X, dtype=float)

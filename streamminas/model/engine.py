from streamminas.metrics.confusion import DynamicConfusionMatrix
from streamminas.model.state import MinasModel
from streamminas.utils.data_structure import Category, Labeling

__all__ = ["initialize_model", "process"]

MIN_OFFLINE_CLUSTER_SIZE = 3

def initialize_model(training_set, config):
    """Offline phase of MINAS [1]. Learns the microclusters of every class of the training set.

    [1] de Faria, Elaine Ribeiro, André Carlos Ponce de Leon Ferreira Carvalho, and Joao Gama. "MINAS: multiclass learning algorithm for novelty detection in data streams."
    Data mining and knowledge discovery 30 (2016): 640-680.

    Parameters
    ----------
    training_set : list of Instance
        Labeled instances
    config : MinasConfiguration
        Configuration, `clustering_for_initialization` is applied to the instances of each label

    Returns
    -------
    MinasModel
        Model ready for the online phase
    """
    training_set = sorted(training_set, key=lambda instance: instance.timestamp)

    # dict keeps the order in which labels are first seen
    instances_by_label = {}
    for instance in training_set:
        instances_by_label.setdefault(instance.label, []).append(instance)

    decision_model = []
    for label, instances in instances_by_label.items():
        microclusters = config.clustering_for_initialization.execute(instances)

        for microcluster in microclusters:
            microcluster.label = label
            microcluster.category = Category.KNOWN

        # tiny clusters are considered outliers
        decision_model.extend(mc for mc in microclusters if mc.n >= MIN_OFFLINE_CLUSTER_SIZE)

        if config.verbose > 0:
            print(f"Class {label}: {len(instances)} instances, {len(microclusters)} microclusters")

    return MinasModel(decision_model, DynamicConfusionMatrix(instances_by_label.keys()))

def process(instance, model, config):
    """Online phase of MINAS. Classifies one instance and updates the model.

    An explained instance is labeled right away. Otherwise it is kept in the temporary memory until the novelty
    detection process labels it, which may happen during this call or a later one.

    Parameters
    ----------
    instance : Instance
        Instance to classify. Its label is only used to update the confusion matrix.
    model : MinasModel
        Model, updated in place
    config : MinasConfiguration
        Configuration

    Returns
    -------
    list of Labeling
        The labeling of this instance if it was explained, followed or replaced by the delayed labelings produced by
        the novelty detection process. Empty if nothing was labeled.
    """
    model.last_timestamp = instance.timestamp

    classification = config.data_instance_decision_rule.classify(instance, model.decision_model)
    labelings = []

    if classification.explained:
        closest = classification.closest
        closest.update_cluster(instance, config.is_incremental)
        labelings.append(Labeling(instance.timestamp, closest.label, closest.category == Category.NOVELTY))

    else:
        model.temporary_memory.append(instance)

        if config.verbose > 1:
            print('Memory length: ', len(model.temporary_memory))
        elif config.verbose > 0:
            if len(model.temporary_memory) % 100 == 0: print('Memory length: ', len(model.temporary_memory))

        if len(model.temporary_memory) >= config.temporary_memory_max_size:
            labelings.extend(_novelty_detect(model, config))

    if model.last_timestamp % config.window_size == 0:
        _trigger_forget(model, config)

    if classification.explained:
        closest = classification.closest
        model.confusion_matrix.add_prediction(instance, closest.label, closest.category == Category.NOVELTY)
    else:
        model.confusion_matrix.add_unknown(instance)

    return labelings

def _print_cluster(message, cluster, verbose):
    if verbose > 1:
        print(message, cluster)
    elif verbose > 0:
        print(message, cluster.small_str())

def _novelty_detect(model, config):
    if config.verbose > 1: print("Novelty detection started")

    candidates = config.clustering_for_novelty_detection.execute(model.temporary_memory.get_all_instances())
    candidates = [cluster for cluster in candidates
                  if cluster.is_representative(config.minimum_cluster_size) and cluster.is_cohesive(model.decision_model)]

    decision_rule = config.microcluster_decision_rule
    labelings = []

    for cluster in candidates:
        classification = decision_rule.classify(cluster, model.decision_model)

        if classification.explained:  # the new microcluster is an extension
            closest = classification.closest
            _print_cluster("Extension of cluster: ", closest, config.verbose)
            cluster.label = closest.label
            cluster.category = closest.category

        else:
            classification = decision_rule.classify(cluster, model.sleep_memory)

            if classification.explained:  # extension of a sleeping concept
                closest = classification.closest
                _print_cluster("Waking cluster: ", closest, config.verbose)
                cluster.label = closest.label
                cluster.category = closest.category

                model.sleep_memory.remove(closest)
                model.decision_model.append(closest)

            else:  # the new microcluster is a novelty pattern
                cluster.label = str(model.novelty_count)
                cluster.category = Category.NOVELTY
                model.novelty_count += 1
                _print_cluster("Novel cluster: ", cluster, config.verbose)

        model.decision_model.append(cluster)

        is_novelty = cluster.category == Category.NOVELTY
        for instance in model.temporary_memory.remove(cluster.timestamps):
            model.confusion_matrix.update_delayed(instance, cluster.label, is_novelty)
            labelings.append(Labeling(instance.timestamp, cluster.label, is_novelty))

    return labelings

def _trigger_forget(model, config):
    for cluster in list(model.decision_model):
        if model.last_timestamp - cluster.timestamp > config.microcluster_lifespan:
            _print_cluster("Forgetting cluster: ", cluster, config.verbose)
            model.decision_model.remove(cluster)
            model.sleep_memory.append(cluster)

    expired = model.temporary_memory.forget(model.last_timestamp, config.instance_lifespan)
    if expired and config.verbose > 1:
        print("Instances dropped from memory: ", len(expired))

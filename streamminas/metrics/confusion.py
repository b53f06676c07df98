from river import metrics

from streamminas.exceptions import PreconditionError

__all__ = ["DynamicConfusionMatrix"]

class DynamicConfusionMatrix:
    """Confusion matrix for novelty detection whose rows and columns grow as new labels appear in the stream [1].

    Rows are the true labels. Predictions are split into two column families, the known labels and the novelty
    patterns, and every row has one extra counter for the samples left unknown. Each family keeps its counts in a
    river confusion matrix while the label lists keep the order in which labels were first seen.

    [1] E. R. Faria, I. J. C. R. Gonçalves, J. Gama and A. C. P. L. F. Carvalho, "Evaluation Methodology for Multiclass Novelty Detection Algorithms,"
    2013 Brazilian Conference on Intelligent Systems, Fortaleza, Brazil, 2013, pp. 19-25, doi: 10.1109/BRACIS.2013.12.

    Parameters
    ----------
    known_labels : iterable
        Labels learned in the offline phase, each one gets a row and a known column

    Attributes
    ----------
    rows : list
        True labels, in order of first sighting
    known_columns : list
        Known labels predicted so far, in order of first sighting
    novelty_columns : list
        Novelty patterns predicted so far, in order of first sighting
    known_cm : river.metrics.confusion.ConfusionMatrix
        Counts of the known column family
    novelty_cm : river.metrics.confusion.ConfusionMatrix
        Counts of the novelty column family
    unknown : dict
        Number of samples of each row currently left unknown
    """
    def __init__(self, known_labels=()):
        self.rows = []
        self.known_columns = []
        self.novelty_columns = []
        self.known_cm = metrics.confusion.ConfusionMatrix()
        self.novelty_cm = metrics.confusion.ConfusionMatrix()
        self.unknown = {}

        for label in known_labels:
            self._add_known_column(label)
            self._add_row(label)

    def add_prediction(self, instance, predicted_label, is_novel):
        """Records a prediction for an instance.

        Parameters
        ----------
        instance : Instance
            The classified instance, its label is the true label
        predicted_label : str or int
            Label of the microcluster that explained the instance
        is_novel : bool
            Whether the predicted label is a novelty pattern
        """
        self._add_row(instance.label)

        if is_novel:
            if predicted_label not in self.novelty_columns:
                self.novelty_columns.append(predicted_label)
            self.novelty_cm.update(instance.label, predicted_label)
        else:
            self._add_known_column(predicted_label)
            self.known_cm.update(instance.label, predicted_label)

    def add_unknown(self, instance):
        """Records an instance that could not be explained."""
        self._add_row(instance.label)
        self.unknown[instance.label] += 1

    def update_delayed(self, instance, predicted_label, is_novel):
        """Moves an instance previously recorded as unknown to the given prediction."""
        self._add_row(instance.label)
        self.unknown[instance.label] -= 1
        self.add_prediction(instance, predicted_label, is_novel)

    def get(self, true_label, predicted_label, is_novel=False):
        """Returns the count of a cell, 0 for rows or columns never seen."""
        cm = self.novelty_cm if is_novel else self.known_cm
        if true_label not in cm.data:
            return 0
        return int(cm.data[true_label].get(predicted_label, 0))

    def get_unknown(self, true_label):
        return self.unknown.get(true_label, 0)

    def number_of_explained_samples(self, label=None):
        """Returns the number of explained samples of a row, or of the whole matrix if `label` is None."""
        if label is None:
            return sum(self.number_of_explained_samples(row) for row in self.rows)

        return (sum(self.get(label, column) for column in self.known_columns)
                + sum(self.get(label, column, True) for column in self.novelty_columns))

    def as_dict(self):
        """Returns a snapshot of every cell, keyed by row then by column family.

        Returns
        -------
        dict
            {row: {"known": {column: count}, "novelty": {column: count}, "unknown": count}}
        """
        return {
            row: {
                "known": {column: self.get(row, column) for column in self.known_columns},
                "novelty": {column: self.get(row, column, True) for column in self.novelty_columns},
                "unknown": self.get_unknown(row),
            }
            for row in self.rows
        }

    def get_associated_classes(self):
        """Associates each novelty pattern to the row contributing most of its samples. The first row wins ties and
        a novelty pattern with no sample is not associated.

        Returns
        -------
        dict
            Novelty patterns associated to each row
        """
        association = {}

        for column in self.novelty_columns:
            best_count = 0
            best_row = None

            for row in self.rows:
                count = self.get(row, column, True)
                if count > best_count:
                    best_count = count
                    best_row = row

            if best_row is not None:
                association.setdefault(best_row, []).append(column)

        return association

    def measure_cer(self):
        """Combined Error Rate (CER), the average of the false positive and false negative rates of each row, weighted
        by the share of explained samples of the row. Novelty patterns count towards the row they are associated to.

        Returns
        -------
        float
            Combined error rate

        Raises
        ------
        PreconditionError
            If no sample was explained yet
        """
        total_explained = self.number_of_explained_samples()
        if total_explained == 0:
            raise PreconditionError("CER is undefined before any sample is explained")

        association = self.get_associated_classes()
        true_positives = {row: self._true_positives(row, association) for row in self.rows}
        total = 0

        for row in self.rows:
            tp = true_positives[row]
            tn = sum(count for other, count in true_positives.items() if other != row)
            fp = self._false_positives(row, association)
            fn = self._false_negatives(row, association)

            rate = self.number_of_explained_samples(row) / total_explained
            total += rate * (fp / max(1, fp + tn)) + rate * (fn / max(1, fn + tp))

        return total / 2

    def measure_unkr(self):
        """Unknown rate (UnkR), the mean over the rows of the share of samples left unknown.

        Returns
        -------
        float
            Unknown rate

        Raises
        ------
        PreconditionError
            If the matrix has no row
        """
        if not self.rows:
            raise PreconditionError("UnkR is undefined for a matrix without rows")

        total = 0
        for row in self.rows:
            unexplained = self.get_unknown(row)
            explained = self.number_of_explained_samples(row)

            if explained > 0:
                total += unexplained / (explained + unexplained)
            elif unexplained > 0:
                total += 1

        return total / len(self.rows)

    def _add_row(self, label):
        if label not in self.unknown:
            self.rows.append(label)
            self.unknown[label] = 0

    def _add_known_column(self, label):
        if label not in self.known_columns:
            self.known_columns.append(label)

    def _true_positives(self, row, association):
        tp = self.get(row, row) if row in self.known_columns else 0
        return tp + sum(self.get(row, column, True) for column in association.get(row, []))

    def _false_positives(self, row, association):
        columns = association.get(row, [])
        fp = 0
        for other in self.rows:
            if other == row:
                continue
            if row in self.known_columns:
                fp += self.get(other, row)
            fp += sum(self.get(other, column, True) for column in columns)

        return fp

    def _false_negatives(self, row, association):
        # a row counts known-column errors only if it is a known label itself, and novelty-column errors only if a
        # novelty pattern was associated to it
        fn = 0
        if row in self.known_columns:
            fn += sum(self.get(row, column) for column in self.known_columns if column != row)

        if row not in association:
            return fn

        columns = association[row]
        return fn + sum(self.get(row, column, True) for column in self.novelty_columns if column not in columns)

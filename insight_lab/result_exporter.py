import os
import shutil

from datetime import datetime

from tqdm.auto import tqdm

from .comparisons import find_cosine_comparisons, compute_distance_evolution, create_similarity_matrix, \
                          COMPARISON_COLUMNS, DISTANCE_EVOLUTION_COLUMNS
from .file_writer import FileWriter
from .helpers import flat_map, position_labels
from .point_collection import POINT_COLUMNS

class ResultExporter:
    def __init__(self, output_dir, result):
        self.output_dir = output_dir
        self.result = result

        # Append a trailing slash to the path given so we're sure it's a directory
        if (self.output_dir[-1] != "/"):
            self.output_dir = self.output_dir + "/"

    def export(self):
        # Delete existing export
        if os.path.exists(self.output_dir):
            shutil.rmtree(self.output_dir)

        # Create directory anew
        os.makedirs(self.output_dir)

        self.write_paths_json()
        self.write_summary()
        self.write_points()
        self.write_attention_matrices()
        self.write_similarity_matrices()
        self.write_comparisons()
        self.write_distance_evolution()

    def write_paths_json(self):
        self.paths = { "summary": "summary.json",
                       "points": "points.tsv",
                       "comparisons": "comparisons.tsv",
                       "distance_evolution": "distance_evolution.tsv" }

        for source_id in self.result.get_source_ids():
            self.paths[f"attention{source_id}"] = f"attention.{source_id}.tsv"
            self.paths[f"similarity{source_id}"] = f"similarity.{source_id}.tsv"

        FileWriter.write("{}paths.json".format(self.output_dir), self.paths, content_type="json")

    def write_summary(self):
        summary = { "date": datetime.today().strftime('%Y-%m-%d'),
                    "sentence_similarity": self.result.sentence_similarity,
                    "dimension_reduction": self.result.dimension_reduction_technique,
                    "token_labels": self.get_token_labels(),
                    "phrases": {} }

        for source_id in self.result.get_source_ids():
            phrase = self.result.get_phrase(source_id)
            summary["phrases"][source_id] = { "phrase": phrase.phrase,
                                              "tokens": phrase.tokens }

        FileWriter.write("{}{}".format(self.output_dir, self.paths["summary"]), summary, content_type="json")

    def write_points(self):
        rows = list(map(lambda point: point.as_row(), self.result.points))

        FileWriter.write("{}{}".format(self.output_dir, self.paths["points"]),
                         rows,
                         content_type="tsv",
                         columns=POINT_COLUMNS)

    def write_token_matrix(self, path, tokens, matrix):
        # rows and columns are both token instances of one phrase
        labels = position_labels(tokens)

        rows = []
        for position, label in enumerate(labels):
            row = { "_token": label,
                    **dict(zip(labels, map(float, matrix[position]))) }
            rows.append(row)

        FileWriter.write("{}{}".format(self.output_dir, path),
                         rows,
                         content_type="tsv",
                         columns=[ "_token" ] + labels)

    def write_attention_matrices(self):
        for source_id in tqdm(self.result.get_source_ids()):
            phrase = self.result.get_phrase(source_id)

            # rows = attending token, columns = attended token
            self.write_token_matrix(self.paths[f"attention{source_id}"],
                                    phrase.tokens,
                                    phrase.attention_weights)

    def write_similarity_matrices(self):
        for source_id in self.result.get_source_ids():
            phrase = self.result.get_phrase(source_id)

            # Cosine similarity among the tokens after the encoder
            self.write_token_matrix(self.paths[f"similarity{source_id}"],
                                    phrase.tokens,
                                    create_similarity_matrix(phrase.final_vectors))

    def write_comparisons(self):
        FileWriter.write("{}{}".format(self.output_dir, self.paths["comparisons"]),
                         find_cosine_comparisons(self.result),
                         content_type="tsv",
                         columns=COMPARISON_COLUMNS)

    def write_distance_evolution(self):
        FileWriter.write("{}{}".format(self.output_dir, self.paths["distance_evolution"]),
                         compute_distance_evolution(self.result, limit=None),
                         content_type="tsv",
                         columns=DISTANCE_EVOLUTION_COLUMNS)

    def get_token_labels(self):
        return flat_map(lambda source_id: position_labels(self.result.get_phrase(source_id).tokens, source_id),
                        self.result.get_source_ids())

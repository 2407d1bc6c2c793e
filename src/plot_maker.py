import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd

from ga_exceptions import ReportingError


class EvolutionVisualizer:
    REQUIRED_COLUMNS = ["Generation", "Best_Fitness", "Avg_Fitness", "Worst_Fitness"]

    def __init__(self, history_csv, output_dir=None):
        """
        Initialize the visualizer with a fitness history CSV written by GAReporter.
        Plots are saved next to the CSV unless output_dir is given.
        """
        self.history_csv = history_csv
        self.output_dir = output_dir or os.path.dirname(os.path.abspath(history_csv))
        self.data = self._load_history()

    def _load_history(self):
        """
        Load the fitness history and check it has the expected columns.
        """
        if not os.path.exists(self.history_csv):
            raise ReportingError(f"Fitness history not found: {self.history_csv}",
                                 output_dir=self.output_dir, file_type='csv')

        df = pd.read_csv(self.history_csv)
        missing = [col for col in self.REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise ReportingError(f"Fitness history is missing columns: {missing}",
                                 output_dir=self.output_dir, file_type='csv')

        for col in self.REQUIRED_COLUMNS[1:]:
            df[col] = pd.to_numeric(df[col], errors="coerce")
        return df.sort_values(by="Generation").reset_index(drop=True)

    def best_generation(self):
        """
        Generation holding the highest best fitness (first one on ties).
        """
        return int(self.data.loc[self.data["Best_Fitness"].idxmax(), "Generation"])

    def plot_fitness_history(self, filename="fitness_history.png"):
        """
        Plot best, average and worst fitness across generations.
        """
        os.makedirs(self.output_dir, exist_ok=True)
        generations = self.data["Generation"]

        plt.figure(figsize=(10, 6))
        plt.plot(generations, self.data["Best_Fitness"], marker="o", linestyle="-", color="b", label="Best Fitness")
        plt.plot(generations, self.data["Avg_Fitness"], marker=".", linestyle="-", color="g", label="Average Fitness")
        plt.plot(generations, self.data["Worst_Fitness"], linestyle="--", color="r", label="Worst Fitness")
        plt.title("Fitness Across Generations")
        plt.xlabel("Generation")
        plt.ylabel("Fitness")
        plt.legend()
        plt.grid(True)

        plot_path = os.path.join(self.output_dir, filename)
        plt.savefig(plot_path)
        plt.close()
        return plot_path

#!/usr/bin/env python3
"""Storage capacity experiment for discrete Hopfield networks.

Stores P = load * N random bipolar patterns, corrupts each with a fixed
fraction of flipped bits, and measures how often recall returns the stored
pattern exactly. Recall degrades sharply as the load approaches the classical
capacity of roughly 0.14 N for Hebbian weights.

Usage:
    python experiment.py
    python experiment.py network.dimension=500 recall.mode=sync
"""

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parents[2]))

import json
import logging

import hydra
import torch
from omegaconf import DictConfig
from tqdm import tqdm

from hopfield import HopfieldConfig, HopfieldNetwork, RecallConfig
from hopfield.utils import StateGenerator, add_noise, overlap

logger = logging.getLogger(__name__)


class CapacityExperiment:
    """Sweeps the pattern load and records recall quality per load."""

    def __init__(self, cfg: DictConfig):
        self.cfg = cfg
        self.dimension = cfg.network.dimension
        self.network_config = HopfieldConfig(
            normalize=cfg.network.normalize,
            num_workers=cfg.network.num_workers,
        )
        self.results = []

    def recall_config(self, seed: int) -> RecallConfig:
        return RecallConfig(
            mode=self.cfg.recall.mode,
            sweep_order=self.cfg.recall.sweep_order,
            max_iterations=self.cfg.recall.max_iterations,
            seed=seed,
        )

    def run_trial(self, num_patterns: int, seed: int) -> dict:
        """Train on fresh random patterns and recall each from a noisy cue."""
        patterns = StateGenerator(self.dimension, seed=seed).create_state_collection(
            num_patterns
        )
        noise_generator = torch.Generator().manual_seed(seed)
        cues = [
            add_noise(pattern, p=self.cfg.experiment.noise, generator=noise_generator)
            for pattern in patterns
        ]

        with HopfieldNetwork(self.dimension, self.network_config) as network:
            network.train(patterns)
            results = network.recall_many(cues, self.recall_config(seed))

        exact = sum(
            torch.equal(result.state, pattern)
            for result, pattern in zip(results, patterns, strict=True)
        )
        return {
            "exact": exact,
            "overlap": sum(
                overlap(result.state, pattern)
                for result, pattern in zip(results, patterns, strict=True)
            ),
            "converged": sum(result.converged for result in results),
            "steps": sum(result.steps for result in results),
        }

    def run(self) -> list[dict]:
        loads = self.cfg.experiment.loads
        trials = self.cfg.experiment.trials

        for load in tqdm(loads, desc="load"):
            num_patterns = max(1, round(load * self.dimension))
            totals = {"exact": 0, "overlap": 0.0, "converged": 0, "steps": 0}
            for trial in range(trials):
                trial_totals = self.run_trial(num_patterns, self.cfg.seed + trial)
                for key, value in trial_totals.items():
                    totals[key] += value

            recalls = num_patterns * trials
            row = {
                "load": load,
                "num_patterns": num_patterns,
                "exact_rate": totals["exact"] / recalls,
                "mean_overlap": totals["overlap"] / recalls,
                "converged_rate": totals["converged"] / recalls,
                "mean_steps": totals["steps"] / recalls,
            }
            self.results.append(row)
            logger.info(
                f"load={load:.3f} P={num_patterns} exact={row['exact_rate']:.3f} "
                f"overlap={row['mean_overlap']:.3f} steps={row['mean_steps']:.2f}"
            )

        return self.results


@hydra.main(version_base=None, config_path=".", config_name="config")
def main(cfg: DictConfig) -> None:
    """Run the capacity sweep and write the results as JSON."""
    experiment = CapacityExperiment(cfg)
    results = experiment.run()

    output_path = Path(cfg.output)
    output_path.write_text(json.dumps(results, indent=2))
    print(f"Results saved to: {output_path.resolve()}")


if __name__ == "__main__":
    main()

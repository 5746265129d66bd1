#!/usr/bin/env python3
"""
CLI script for classifying a single Kepler Object of Interest.

Reads the nine features either from the command line (in input order) or
from a CSV/JSON file, then prints the prediction as JSON.

    python scripts/classify.py --features 10 2 0.1 85 300 4.5 1 1 5500
    python scripts/classify.py --file koi.csv --top-k 5
"""

import json
import sys
from pathlib import Path

import click

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from exoclassifier.api.upload import UploadParseError, parse_upload
from exoclassifier.ml.classification import (
    FEATURE_NAMES,
    FeatureValidationError,
    HeuristicEnsemble,
    RandomAttributor,
    classify,
)
from exoclassifier.utils.config_loader import Config
from exoclassifier.utils.logging_config import LogConfig, get_logger

logger = get_logger("predictions")


@click.command()
@click.option(
    '--features',
    '-f',
    'feature_values',
    nargs=len(FEATURE_NAMES),
    type=str,
    help=f'Nine feature values in order: {", ".join(FEATURE_NAMES)}'
)
@click.option(
    '--file',
    'input_path',
    type=click.Path(exists=True, dir_okay=False),
    help='CSV or JSON feature file'
)
@click.option(
    '--top-k',
    '-k',
    type=click.IntRange(min=1),
    default=None,
    help='Number of top features to report (default from config)'
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Seed for the attribution random source'
)
@click.option(
    '--verbose',
    '-v',
    is_flag=True,
    help='Verbose output'
)
def main(feature_values, input_path, top_k, seed, verbose):
    """
    Classify a KOI as Confirmed, Candidate or False Positive.
    """
    LogConfig.setup(log_level="DEBUG" if verbose else "WARNING", enable_json=False)

    if bool(feature_values) == bool(input_path):
        raise click.UsageError("Provide exactly one of --features or --file")

    clf_config = Config().load_all().classifier
    top_k = top_k or clf_config.top_k
    seed = seed if seed is not None else clf_config.random_seed

    try:
        if input_path:
            path = Path(input_path)
            raw = list(parse_upload(path.name, path.read_bytes()).values())
        else:
            raw = list(feature_values)
        result = classify(
            raw,
            backend=HeuristicEnsemble(attributor=RandomAttributor(seed=seed)),
            top_k=top_k,
        )
    except (FeatureValidationError, UploadParseError) as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps(result.to_dict(), indent=2))
    if verbose:
        logger.info(f"Rules fired: {list(result.fired_rules) or 'none'}")


if __name__ == '__main__':
    main()

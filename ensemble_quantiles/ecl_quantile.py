#!/usr/bin/env python
"""Quantiles of summary vectors over an ensemble of reservoir simulation runs
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from ensemble_quantiles._datainput import (
    OutputSpec,
    expand_case_list,
    load_quantile_config,
)
from ensemble_quantiles._formatters import ColumnMetadata, create_output_formatter
from ensemble_quantiles._models import EnsembleModel, QuantileResampler, QuantileTable

LOGGER = logging.getLogger(__name__)

DESCRIPTION: str = """
Load an ensemble of ECLIPSE summary cases and output quantiles of summary vectors
over the time span of the simulations. The program is driven by a configuration
file with three keywords:

   CASE_LIST   simulation*X/run*X/CASE*.DATA
   CASE_LIST   extra_simulation.DATA    even/more/simulations*GG/run*.DATA
   OUTPUT      FILE1   S3GRAPH WWCT:OP_1:0.10  WWCT:OP_1:0.50   WOPR:OP_3:0.90
   OUTPUT      FILE2   PLAIN   FOPT:0.10  FOPT:0.50  FOPT:0.90
   NUM_INTERP  100

CASE_LIST: Paths to the summary cases to load, may contain unix-style wildcards.
  One CASE_LIST keyword can point to several cases, and the keyword can be
  repeated. Cases may be ECLIPSE cases or single run .arrow summary files.

OUTPUT: Output file name, output format and the summary vectors & quantiles
  to output. The supported formats are:

     S3GRAPH: S3GRAPH user format
     PLAIN:   Columns of data without any header information
     HEADER:  Like PLAIN, but with a header at the top

  Each vector & quantile is a ":" separated string consisting of:

     VAR: The ECLIPSE summary variable, e.g. RPR, WWCT or GOPT.
     WG?: Extra information making the variable unique, e.g. the name of a well
          or group, or the region number. Field variables have none.
     Q:   The quantile, e.g. 0.10 for the P10 and 0.90 for the P90 quantile.

  Examples are:

     WWCT:OPX:0.75:    The P75 quantile of the watercut in well OPX.
     BPR:10,10,5:0.50: The P50 quantile of the block pressure in block 10,10,5.
     FOPT:0.90:        The P90 quantile of the field oil production total.

NUM_INTERP: Number of points on the common time axis all cases are interpolated
  onto before quantiles are calculated, default 50. Rate vectors are not
  interpolated linearly between report steps, and might look jagged if
  NUM_INTERP is set too high. Optional.

A configuration file with suffix .yml or .yaml is read as YAML with the keys
case_list, num_interp and output (list of file, format and keys).
"""


def _get_parser() -> argparse.ArgumentParser:
    """Setup parser for command line options"""
    parser = argparse.ArgumentParser(
        prog="ecl_quantile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=DESCRIPTION,
    )
    parser.add_argument(
        "config_file",
        type=Path,
        help="Configuration file with CASE_LIST, OUTPUT and NUM_INTERP keywords",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Output debug information",
    )
    return parser


def run_output(output: OutputSpec, ensemble: EnsembleModel) -> QuantileTable:
    """Calculate the quantiles of one output and write them to its file"""
    start_s = time.perf_counter()
    LOGGER.info(f"Creating output file: {output.file}")

    vectors = list(dict.fromkeys(request.vector for request in output.requests))
    ensemble.check_vector_metadata(vectors)

    table = QuantileResampler(ensemble).resample(output.requests)

    columns = [
        ColumnMetadata.from_vector_metadata(
            request.vector, ensemble.vector_metadata(request.vector)
        )
        for request in output.requests
    ]
    create_output_formatter(output.output_format).write(output.file, table, columns)

    LOGGER.info(
        f"Wrote {output.file} in {(time.perf_counter() - start_s):.2f}s "
        f"({table.num_rows} rows, {table.num_columns} columns)"
    )
    return table


def ecl_quantile(config_file: Path) -> None:
    config = load_quantile_config(config_file)

    case_paths = expand_case_list(config.case_list)
    ensemble = EnsembleModel.from_paths(case_paths, num_interp=config.num_interp)

    for output in config.outputs:
        run_output(output, ensemble)


def main() -> None:
    """Entry point from command line"""
    parser = _get_parser()
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    logging.getLogger("ensemble_quantiles").setLevel(
        logging.DEBUG if args.verbose else logging.INFO
    )

    try:
        ecl_quantile(args.config_file)
    except (ValueError, KeyError, OSError) as err:
        LOGGER.error(f"ecl_quantile failed: {err}")
        sys.exit(1)

    LOGGER.info("done")


if __name__ == "__main__":
    main()

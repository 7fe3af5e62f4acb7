"""Script for the pytnseq command.

The pytnseq command derives transposon insertion sites from the alignments
of fragmented TnSeq reads. Fragments are optionally collapsed to the best
scoring fragment of each parent read, after which the alignments are
resolved to insertion coordinates and tallied into ranked site tables. The
command provides access to several pipelines, which either start from
existing alignments or align the reads themselves.
"""

import argparse
import logging

from pytnseq.align.pipelines import get_pipelines

from ._logging import print_header, print_footer


def main():
    """Main function for pytnseq."""

    logger = logging.getLogger()
    args = parse_args()

    print_header(logger, command=args.pipeline)

    pipeline = args.pipeline_class.from_args(args)
    pipeline.run(
        input_path=getattr(args, args.pipeline_class.input_option),
        output_dir=args.output_dir,
        sample=args.sample)

    print_footer(logger)


def parse_args(argv=None):
    """Parses arguments for pytnseq."""

    # Setup main parser.
    parser = argparse.ArgumentParser(prog='pytnseq')
    subparsers = parser.add_subparsers(dest='pipeline')
    subparsers.required = True

    # Register pipelines.
    pipelines = get_pipelines()

    for name, class_ in sorted(pipelines.items()):
        pipeline_parser = subparsers.add_parser(name)
        class_.configure_args(pipeline_parser)
        pipeline_parser.set_defaults(pipeline_class=class_)

    return parser.parse_args(argv)


if __name__ == '__main__':
    main()

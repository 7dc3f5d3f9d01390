"""
CLI entry point

Extracts a subprocess of a BPMN file as a standalone BPMN process
"""
import sys
import asyncio
import argparse
from pathlib import Path

from subproc2bpmn.io.bpmn_loader import BpmnLoader
from subproc2bpmn.extract.extractor import SubProcessExtractor
from subproc2bpmn.logger import ExtractionLogger
from subproc2bpmn.analysis import analyze_document, print_summary
from subproc2bpmn.config import ExtractionConfig
from subproc2bpmn.errors import NotFoundError


def _list_subprocesses(extractor: SubProcessExtractor, registry) -> None:
    subprocess_ids = registry.subprocess_ids()
    if not subprocess_ids:
        print("No subprocesses found")
        return
    for sp_id in subprocess_ids:
        element = registry.get(sp_id)
        name = getattr(element.business_object, "name", None) or "-"
        nested = "nested" if extractor.has_nested(sp_id) else "flat"
        print(f"  {sp_id}\t{name}\t{extractor.count_elements(sp_id)} elements\t{nested}")


def main():
    """Main function"""
    parser = argparse.ArgumentParser(
        description='Extract a BPMN subprocess as a standalone process',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  subproc2bpmn input.bpmn --list
  subproc2bpmn input.bpmn output.bpmn -s SubProcess_1
  subproc2bpmn input.bpmn output.bpmn -s SubProcess_1 --padding 50
  subproc2bpmn input.bpmn output.bpmn -s SubProcess_1 --layout-url http://localhost:3000/layout
  subproc2bpmn input.bpmn output.bpmn -s SubProcess_1 -a
        """
    )
    parser.add_argument('input', type=str, help='Path to input BPMN file')
    parser.add_argument('output', nargs='?', type=str, help='Path to output BPMN file')
    parser.add_argument('-s', '--subprocess', dest='subprocess_id', type=str,
                        help='Id of the subprocess to extract')
    parser.add_argument('--list', dest='list_subprocesses', action='store_true',
                        help='List the subprocesses of the input file and exit')
    parser.add_argument('--padding', type=float, default=None,
                        help='Offset of the extracted diagram from the origin (default: 100)')
    parser.add_argument('--layout-url', dest='layout_url', type=str, default=None,
                        help='Auto-layout service endpoint; the extracted document is re-laid-out when given')
    parser.add_argument('--layout-timeout', dest='layout_timeout', type=float, default=None,
                        help='Auto-layout request timeout in seconds (default: 10)')
    parser.add_argument('-a', '--analyze', action='store_true',
                        help='Display analysis of the extracted document')

    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Input file not found: {input_path}")
        sys.exit(1)

    if not args.list_subprocesses and (not args.output or not args.subprocess_id):
        parser.error("the following arguments are required: output, -s/--subprocess")

    config = ExtractionConfig()
    if args.padding is not None:
        config.padding = args.padding
    if args.layout_url:
        config.layout_url = args.layout_url
    if args.layout_timeout is not None:
        config.layout_timeout = args.layout_timeout

    print(f"Parsing: {input_path}")

    try:
        logger = ExtractionLogger()
        loader = BpmnLoader(logger=logger, config=config)
        document = loader.load_file(input_path)
        extractor = SubProcessExtractor(document.registry, config=config, logger=logger)

        if args.list_subprocesses:
            _list_subprocesses(extractor, document.registry)
            return

        result = asyncio.run(
            extractor.extract(args.subprocess_id, use_auto_layout=bool(config.layout_url))
        )

        output_path = Path(args.output)
        output_path.write_text(result.xml, encoding="utf-8")
        print(f"Saved {output_path} ({result.name}, {result.element_count} elements)")
        if result.has_nested_subprocesses:
            print("Note: the subprocess contains nested subprocesses")

        # Display warnings
        warnings = logger.get_warnings()
        if warnings:
            print(f"\nWarnings ({len(warnings)}):")
            for warning in warnings:
                print(f"  - [{warning.element_id}] {warning.message}")

        if args.analyze:
            print_summary(analyze_document(result.xml))

    except NotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()

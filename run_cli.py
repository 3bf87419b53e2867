"""Entry point for running the CLI."""
import logging
import sys
from merge_designer.cli.main import main

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python run_cli.py <data_file> [design.json|document_type] [output_file]")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    data_file = sys.argv[1]
    design = sys.argv[2] if len(sys.argv) > 2 else None
    output_file = sys.argv[3] if len(sys.argv) > 3 else None
    main(data_file, design, output_file)

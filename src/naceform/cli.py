"""
Command line interface.

    naceform compile --taxonomy files/nace.json --policy dual --output-dir files
    naceform compile --example --policy gated-applicability --dot gates.dot
    naceform policies
    naceform show-policy dual > my_policy.yaml
    naceform analyze files/result_1700000000000.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from naceform.analyzer import analyze_questionnaire
from naceform.backends import DotMode, save_dot_file
from naceform.compiler import assemble
from naceform.errors import NaceFormError
from naceform.examples import build_example_taxonomy
from naceform.loader import load_taxonomy
from naceform.policies import POLICIES, get_policy
from naceform.serialization import (
    FORMATS,
    default_output_path,
    load_policy_file,
    policy_to_yaml,
    questions_from_json,
    save_questionnaire,
)
from naceform.taxonomy import TaxonomyIndex

logger = logging.getLogger("naceform")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="naceform",
        description="Compile the NACE taxonomy into a conditional survey questionnaire",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    comp = sub.add_parser("compile", help="Compile a taxonomy with a policy")
    source = comp.add_mutually_exclusive_group(required=True)
    source.add_argument("--taxonomy", help="Path to the taxonomy (.json/.yaml)")
    source.add_argument("--example", action="store_true", help="Use the bundled example taxonomy")
    policy = comp.add_mutually_exclusive_group()
    policy.add_argument("--policy", default="exclusive-primary", help="Built-in policy name")
    policy.add_argument("--policy-file", help="YAML policy file")
    target = comp.add_mutually_exclusive_group()
    target.add_argument("--output", help="Output file path")
    target.add_argument("--output-dir", default="files", help="Directory for result_<ms> output")
    comp.add_argument("--format", choices=FORMATS, default="json", help="Output format")
    comp.add_argument("--dot", help="Also write the gating graph as DOT to this path")
    comp.add_argument(
        "--dot-mode",
        choices=[mode.value for mode in DotMode],
        default=DotMode.SIMPLE.value,
        help="DOT visualization mode",
    )

    sub.add_parser("policies", help="List built-in policies")

    show = sub.add_parser("show-policy", help="Print a built-in policy as YAML")
    show.add_argument("name", help="Built-in policy name")

    analyze = sub.add_parser("analyze", help="Analyze a compiled questionnaire JSON file")
    analyze.add_argument("path", help="Compiled questionnaire (.json)")

    return parser


def _compile(args: argparse.Namespace) -> int:
    if args.example:
        nodes = build_example_taxonomy()
    else:
        nodes = load_taxonomy(args.taxonomy)
    logger.info("Loaded %d taxonomy nodes", len(nodes))

    policy = load_policy_file(args.policy_file) if args.policy_file else get_policy(args.policy)
    questions = assemble(TaxonomyIndex(nodes), policy)

    if args.output:
        path = Path(args.output)
    else:
        path = default_output_path(args.output_dir, fmt=args.format)
    save_questionnaire(questions, path, fmt=args.format)

    if args.dot:
        save_dot_file(questions, args.dot, mode=DotMode(args.dot_mode))
        logger.info("Wrote gating graph to %s", args.dot)

    print(path)
    return 0


def _analyze(args: argparse.Namespace) -> int:
    with open(args.path, "r", encoding="utf-8") as f:
        questions = questions_from_json(f.read())
    report = analyze_questionnaire(questions)

    print(f"Questions:        {report.total_questions}")
    for question_type, count in sorted(report.questions_by_type.items()):
        print(f"  {question_type:<14}{count}")
    print(f"Gated questions:  {report.gated_questions}")
    print(f"Ungated:          {', '.join(report.ungated_questions) or '-'}")
    print(f"Max gate depth:   {report.max_gate_depth}")
    print(f"Total choices:    {report.total_choices}")
    for warning in report.warnings:
        print(f"WARNING: {warning}")
    return 0 if report.is_consistent else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "compile":
            return _compile(args)
        if args.command == "policies":
            for name in sorted(POLICIES):
                policy = get_policy(name)
                print(f"{name:<26}{policy.description or ''}")
            return 0
        if args.command == "show-policy":
            sys.stdout.write(policy_to_yaml(get_policy(args.name)))
            return 0
        if args.command == "analyze":
            return _analyze(args)
    except NaceFormError as e:
        logger.error("%s", e.message)
        return 1
    except OSError as e:
        logger.error("%s", e)
        return 1
    return 2


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Complete Pipeline Demo: Taxonomy → Policy → Questions → Analysis → Diagram

Shows the full workflow on the bundled example taxonomy:
1. Build the taxonomy index
2. Compile it with every built-in policy
3. Analyze the result
4. Write the questionnaire JSON and a gating diagram
"""

from naceform.analyzer import analyze_questionnaire
from naceform.backends import DotMode, save_dot_file
from naceform.compiler import assemble
from naceform.examples import build_example_taxonomy
from naceform.policies import POLICIES, get_policy
from naceform.serialization import questions_to_json, save_questionnaire
from naceform.taxonomy import TaxonomyIndex


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Taxonomy → Questions → Analysis → Diagram")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Index the taxonomy
    # =========================================================================
    print("\n1. INDEXING TAXONOMY...")
    index = TaxonomyIndex(build_example_taxonomy())
    print(f"   ✓ Nodes: {len(index)}")
    for level in range(1, 5):
        print(f"   ✓ Level {level}: {len(index.nodes_at_level(level))}")

    # =========================================================================
    # STEP 2 + 3: Compile and analyze with every policy
    # =========================================================================
    print("\n2. COMPILING...")
    for name in sorted(POLICIES):
        questions = assemble(index, get_policy(name))
        report = analyze_questionnaire(questions)
        print(f"\n   {name}")
        print(f"   ✓ Questions: {report.total_questions} {report.questions_by_type}")
        print(f"   ✓ Ungated: {report.ungated_questions}")
        print(f"   ✓ Max gate depth: {report.max_gate_depth}")
        for warning in report.warnings:
            print(f"      - {warning}")

    # =========================================================================
    # STEP 4: Output
    # =========================================================================
    print("\n3. WRITING OUTPUT...")
    questions = assemble(index, get_policy("exclusive-primary"))
    save_questionnaire(questions, "result_example.json")
    print("   ✓ Saved result_example.json")
    save_dot_file(questions, "questionnaire.dot", mode=DotMode.DETAILED)
    print("   ✓ Saved questionnaire.dot")

    print("\n4. SAMPLE OUTPUT:")
    print("-" * 80)
    lines = questions_to_json(questions).split('\n')
    for line in lines[:30]:
        print(f"   {line}")
    if len(lines) > 30:
        print(f"   ... ({len(lines) - 30} more lines)")

    print("\n" + "=" * 80)
    print("To visualize the diagram:")
    print("  dot -Tpng questionnaire.dot -o questionnaire.png")
    print("=" * 80)


if __name__ == "__main__":
    main()

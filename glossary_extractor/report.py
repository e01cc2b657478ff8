from glossary_extractor.glossary import Glossary


def render_report(glossary: Glossary) -> str:
    """
    Plain-text report: every entry, the entry count, then any duplicate-key issues.
    """
    lines: list[str] = [""]
    for key, value in glossary.entries.items():
        lines.append(f"StringID: {key}")
        lines.append(f"LocString: {value}")
        lines.append("")
    lines.append(f"Found {len(glossary)} entries in {glossary.name}")

    errors = glossary.errors
    if errors:
        lines.append(f"{len(errors)} issues were reported")
        lines.extend(errors)

    return "\n".join(lines) + "\n"

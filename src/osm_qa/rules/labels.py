from osm_qa.domain.entities.osm import Way

MESSAGES = {
    "issues.highway_almost_junction.message": "{highway} is very close but not connected to {highway2}.",
    "issues.highway_almost_junction.tooltip": (
        "Highways that nearly touch another highway may be missing a junction."
    ),
    "issues.fix.tag_as_disconnected.title": "Tag as disconnected",
    "issues.fix.tag_as_disconnected.undo_redo": "Tagged very close features as disconnected.",
}


def t(key: str, **params) -> str:
    return MESSAGES[key].format(**params)


def display_label(way: Way) -> str:
    """name, then ref, then a readable form of the highway type."""
    tags = way.tags
    if tags.get("name"):
        return tags["name"]
    if tags.get("ref"):
        return tags["ref"]
    kind = tags.get("highway")
    if kind:
        return f"{kind.replace('_', ' ').capitalize()} road {way.id}"
    return f"Way {way.id}"

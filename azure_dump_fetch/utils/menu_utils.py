"""Numbered menus and validated selections for interactive prompts."""

import click

from azure_dump_fetch.errors import SelectionError


def render_menu(items, base=1):
    """Render ``items`` as a numbered list.

    Args:
        items (list): Labels to display, in display order
        base (int): Number shown next to the first item

    Returns:
        str: One ``"<n>) <label>"`` line per item
    """
    return '\n'.join(f'{number}) {label}' for number, label in enumerate(items, start=base))


def parse_selection(raw, count, base=1):
    """Turn an operator's answer into a 0-based index.

    Args:
        raw (str): The line the operator typed
        count (int): Number of items that were offered
        base (int): Number that was shown next to the first item

    Returns:
        int: Index into the offered items

    Raises:
        SelectionError: If the answer is empty, not a number or out of range
    """
    text = (raw or '').strip()
    if not text:
        raise SelectionError('Invalid selection: nothing was selected')
    try:
        number = int(text)
    except ValueError:
        raise SelectionError(f"Invalid selection: '{text}' is not a number") from None

    last = base + count - 1
    if not base <= number <= last:
        raise SelectionError(f'Invalid selection: {number} is not between {base} and {last}')
    return number - base


def read_selection(title, items, base=1, prompt=click.prompt):
    """Show a numbered menu, read one answer and return the chosen index."""
    click.echo(title)
    click.echo(render_menu(items, base=base))
    raw = prompt('Enter a number', default='', show_default=False)
    return parse_selection(raw, len(items), base=base)

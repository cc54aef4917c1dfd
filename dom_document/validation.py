"""
Validation rules from HTML forms.
This module reads the constraints declared on form controls and turns them
into Laravel style validation rule lists.
"""

import json
import logging
from typing import Dict, List, Union

from dom_document.dom.dom_object import DOMObject
from dom_document.dom.element import DOMElement

logger = logging.getLogger(__name__)

RULES_ATTRIBUTE = 'data-laravel-rules'


def get_validation_rules(form: Union[DOMObject, DOMElement]) -> Dict[str, List[str]]:
    """
    Collect validation rules for the named controls of a form.

    Rules come from a JSON list in data-laravel-rules, the required and pattern
    attributes, type="number" and the options of a <select>.

    Args:
        form: The <form> element, or a set whose first element is the form

    Returns:
        Dict[str, List[str]]: Rules keyed by control name, controls without rules omitted

    Raises:
        ValueError: For an empty set, a non-form element or invalid JSON
        TypeError: If form is neither a DOMObject nor a DOMElement
    """
    if isinstance(form, DOMObject):
        if not len(form):
            raise ValueError("Result set is empty")
        form = form[0]

    if not isinstance(form, DOMElement):
        raise TypeError("No DOMElement found in argument")

    if form.tag_name != 'form':
        raise ValueError("Method can only be used on form elements")

    rules: Dict[str, List[str]] = {}

    for control in DOMObject(form).find('input, textarea, select'):
        name = control.get_attribute('name')
        if not name:
            continue

        rule: List[str] = []
        wrapped = DOMObject(control)

        declared = control.get_attribute(RULES_ATTRIBUTE)
        if declared:
            try:
                values = json.loads(declared)
            except ValueError as e:
                logger.error(f"Invalid JSON in {RULES_ATTRIBUTE} of '{name}': {e}")
                raise ValueError(f"Invalid JSON in {RULES_ATTRIBUTE}") from e
            if not isinstance(values, list) or not values:
                raise ValueError(f"Invalid JSON in {RULES_ATTRIBUTE}")
            rule.extend(str(value) for value in values)

        if control.has_attribute('required'):
            rule.append('required')

        if control.has_attribute('pattern'):
            rule.append(f"regex:/{control.get_attribute('pattern')}/")

        if control.get_attribute('type') == 'number':
            rule.append('numeric')

        if control.tag_name == 'select':
            values = [DOMObject(option).val() or '' for option in wrapped.find('option')]
            rule.append('in:' + ','.join(values))

        if rule:
            rules[name] = rule

    logger.debug(f"Collected validation rules for {len(rules)} controls")
    return rules

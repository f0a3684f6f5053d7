#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

"""Utilities and helper functions."""


LABEL_SEPARATOR = ','
LABEL_ASSIGNMENT = '='


def format_label_selector(labels):
    """Render a label mapping as an equality based label selector.

    Keys are sorted so that the same mapping always renders identically::

        >>> format_label_selector({'zone': 'a', 'feature.sriov': 'true'})
        'feature.sriov=true,zone=a'
    """
    return LABEL_SEPARATOR.join(
        '%s%s%s' % (key, LABEL_ASSIGNMENT, labels[key])
        for key in sorted(labels))


def parse_label_selector(selector):
    """Parse a selector produced by :func:`format_label_selector`."""
    labels = {}
    for term in (selector or '').split(LABEL_SEPARATOR):
        term = term.strip()
        if not term:
            continue
        key, sep, value = term.partition(LABEL_ASSIGNMENT)
        if not sep:
            raise ValueError('Invalid label selector term: %s' % term)
        labels[key.strip()] = value.strip()
    return labels


def labels_match(wanted, labels):
    """Return True if every wanted label is set to the wanted value."""
    return all(key in labels and labels[key] == value
               for key, value in wanted.items())

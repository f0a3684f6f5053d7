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

"""
This is the single point of entry to generate the sample configuration
file for vfguard. Every other module in this package has a ``list_opts``
function returning a dict keyed by option group.
"""

import collections
import importlib
import os
import pkgutil

LIST_OPTS_FUNC_NAME = "list_opts"


def _tupleize(dct):
    """Take the dict of options and convert to the 2-tuple format."""
    return [(key, val) for key, val in dct.items()]


def list_opts():
    opts = collections.defaultdict(list)
    for mod in _import_modules(_list_module_names()):
        for key, val in getattr(mod, LIST_OPTS_FUNC_NAME)().items():
            opts[key].extend(val)
    return _tupleize(opts)


def _list_module_names():
    package_path = os.path.dirname(os.path.abspath(__file__))
    return [modname
            for _, modname, ispkg in pkgutil.iter_modules(path=[package_path])
            if modname != "opts" and not ispkg]


def _import_modules(module_names):
    imported_modules = []
    for modname in module_names:
        mod = importlib.import_module("vfguard.conf." + modname)
        if not hasattr(mod, LIST_OPTS_FUNC_NAME):
            msg = ("The module 'vfguard.conf.%s' should have a '%s' "
                   "function which returns the config options." %
                   (modname, LIST_OPTS_FUNC_NAME))
            raise Exception(msg)
        imported_modules.append(mod)
    return imported_modules

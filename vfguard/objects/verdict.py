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

from vfguard.objects import base
from vfguard.objects import fields


@base.VFGuardObjectRegistry.register
class ValidationVerdict(base.VFGuardEphemeralObject):
    """Outcome of one admission validation.

    ``reason`` is set whenever ``admit`` is False. ``code`` mirrors the code
    of the exception that caused the denial, so a 5xx code means the policy
    could not be evaluated rather than that it is invalid.
    """

    # Version 1.0: Initial version
    VERSION = '1.0'

    fields = {
        'admit': fields.BooleanField(),
        'reason': fields.StringField(nullable=True, default=None),
        'warnings': fields.ListOfStringsField(default=[]),
        'code': fields.IntegerField(default=200),
    }

    @classmethod
    def admitted(cls, warnings=None):
        return cls(admit=True, warnings=list(warnings or []))

    @classmethod
    def denied(cls, exc, warnings=None):
        return cls(admit=False, reason=exc.format_message(),
                   code=exc.code, warnings=list(warnings or []))

    def to_dict(self):
        return {
            'admit': self.admit,
            'reason': self.reason,
            'warnings': list(self.warnings),
            'code': self.code,
        }

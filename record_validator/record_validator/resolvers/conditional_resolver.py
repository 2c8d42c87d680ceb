# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
from typing import Any, Mapping, Union

from ..models.record import get_path, values_equal
from ..models.specs import INHERIT, ArrayFieldSpec, ConditionalSpec, FieldSpec, _Inherit

logger = logging.getLogger(__name__)


class ConditionalResolver:
    """Selects the spec governing a conditionally-dependent field.

    Resolution happens against the record being validated, on every call, so
    the same schema can yield different rule chains for different records.
    """

    def resolve(
        self, spec: ConditionalSpec, record: Mapping[str, Any]
    ) -> Union[FieldSpec, ArrayFieldSpec, _Inherit]:
        """
        Return the branch spec whose key equals the discriminator's current value.
        If no branch matches, return ``spec.otherwise`` (``INHERIT`` by default).
        """
        discriminator = get_path(record, spec.discriminator_path)

        for key, branch in spec.branches:
            if values_equal(discriminator, key):
                logger.debug(
                    f"Field '{spec.path}': discriminator '{spec.discriminator_path}'={discriminator!r} "
                    f"selected branch {key!r}"
                )
                return branch

        if spec.otherwise is INHERIT:
            logger.debug(
                f"Field '{spec.path}': discriminator '{spec.discriminator_path}'={discriminator!r} "
                f"matched no branch; field left unvalidated"
            )
        return spec.otherwise

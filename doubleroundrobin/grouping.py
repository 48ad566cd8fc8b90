# -*- coding: utf-8 -*-
# Copyright 2018 Ciena Corporation
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
import operator

from .common import (
    _ALL_RELATIONS, DISTINCT, DUPLICATE, InvalidReplicaRelation,
    MemberGrouping, ReplicaGroup,
)

log = logging.getLogger(__name__)


def group_members(members, comparator):
    """
    Cluster members into replica groups.

    Members are sorted by ID and *comparator* is applied to each adjacent
    pair. A :data:`DISTINCT` pair ends the current group after the left
    member, a :data:`SAME_GROUP` pair continues it, and the left member of
    a :data:`DUPLICATE` pair is dropped. The last member always closes the
    final group.

    :param members: Group members in any order.
    :type members: Iterable[GroupMember]
    :param comparator: Replica comparator, see :mod:`doubleroundrobin.replica`.

    :returns: The sorted members, the filtered members, and the groups.
    :rtype: MemberGrouping

    :raises InvalidReplicaRelation:
        when *comparator* returns an unknown relation
    """
    ordered = tuple(sorted(members, key=operator.attrgetter('member_id')))
    if not ordered:
        return MemberGrouping(members=(), filtered=(), groups=())

    filtered = []
    groups = []
    group_start = 0
    for left, right in zip(ordered, ordered[1:]):
        relation = comparator(left.member_id, right.member_id)
        if relation not in _ALL_RELATIONS:
            raise InvalidReplicaRelation(
                'comparator returned {!r} for members {!r} and {!r}'.format(
                    relation, left.member_id, right.member_id))

        if relation == DUPLICATE:
            log.debug('group_members: dropping %r, duplicate of %r',
                      left.member_id, right.member_id)
            continue

        filtered.append(left)
        if relation == DISTINCT:
            groups.append(ReplicaGroup(group_start, len(filtered) - group_start))
            group_start = len(filtered)

    filtered.append(ordered[-1])
    groups.append(ReplicaGroup(group_start, len(filtered) - group_start))

    return MemberGrouping(
        members=ordered,
        filtered=tuple(filtered),
        groups=tuple(groups),
    )

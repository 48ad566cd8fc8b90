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

"""
Replica comparators

A replica comparator decides how two group members relate to one another.
It is called with the member IDs of two members which are adjacent once all
members are sorted by ID, the lesser one first, and must return one of:

:data:`~doubleroundrobin.common.DISTINCT`
    The members are different logical consumers.
:data:`~doubleroundrobin.common.SAME_GROUP`
    The members are replicas of the same logical consumer.
:data:`~doubleroundrobin.common.DUPLICATE`
    The first member is a redundant copy of the second and receives nothing.

Comparators must be deterministic. Any callable with the signature
``comparator(left_member_id, right_member_id)`` will do.
"""

import re

import attr

from .common import DISTINCT, DUPLICATE, SAME_GROUP

# Kafka brokers generate member IDs as ``<client.id>-<UUID>``.
_MEMBER_ID_SUFFIX = re.compile(
    r'-[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\Z',
    re.IGNORECASE,
)


def all_distinct(left_member_id, right_member_id):
    """
    Treat every member as an independent consumer. With this comparator the
    assignment is a plain per-topic round-robin over all members.
    """
    return DISTINCT


def client_id_of(member_id):
    """
    Extract the client ID from a broker-generated member ID.

    >>> client_id_of('billing-0f8fad5b-d9cb-469f-a165-70867728950e')
    'billing'

    Member IDs which lack the UUID suffix are returned unchanged.
    """
    return _MEMBER_ID_SUFFIX.sub('', member_id)


@attr.s(frozen=True, slots=True)
class ClientIdReplicaComparator(object):
    """
    Compare members by a replica key derived from their member IDs.

    Members with identical IDs are duplicates, members with equal keys are
    replicas of one another, and everything else is distinct. The default
    key is :func:`client_id_of`, so consumers started with the same
    ``client.id`` form one replica group.

    Grouping only considers adjacent members, so the key must preserve
    adjacency: all member IDs which share a key should sort next to each
    other. Being a prefix of the member ID is not enough. With client IDs
    ``app`` and ``app-a``, the ID ``app-a-<uuid>`` sorts between
    ``app-9<...>`` and ``app-a<...>``, which splits ``app`` into two
    groups. The default key therefore requires that no ``client.id`` in the
    group is another ``client.id`` followed by ``-``. Groups with nested
    client IDs like these need a comparator of their own.

    :ivar key: Callable mapping a member ID to its replica key.
    """
    key = attr.ib(default=client_id_of)

    def __call__(self, left_member_id, right_member_id):
        if left_member_id == right_member_id:
            return DUPLICATE
        if self.key(left_member_id) == self.key(right_member_id):
            return SAME_GROUP
        return DISTINCT

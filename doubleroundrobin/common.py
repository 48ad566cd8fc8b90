# -*- coding: utf-8 -*-
# Copyright 2015 Cyan, Inc.
# Copyright 2016, 2017, 2018, 2019 Ciena Corporation
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

from collections import namedtuple

import attr

# Replica relation between two adjacent members, as returned by a comparator
DISTINCT = 0  # Members belong to different logical consumers
SAME_GROUP = 1  # Members are replicas of the same logical consumer
DUPLICATE = 2  # The left member is a redundant copy of the right one
_ALL_RELATIONS = (DISTINCT, SAME_GROUP, DUPLICATE)

# Rebalance protocols an assignor may declare
REBALANCE_PROTOCOL_EAGER = 'EAGER'

# Protocol type of the Kafka consumer embedded protocol
CONSUMER_PROTOCOL_TYPE = 'consumer'

###############
#   Structs   #
###############
TopicPartition = namedtuple("TopicPartition", ["topic", "partition"])


@attr.s(frozen=True, slots=True)
class GroupMember(object):
    """
    A consumer group member taking part in a rebalance.

    :ivar str member_id: Coordinator-assigned member identifier.
    :ivar subscriptions: Names of the topics the member subscribes to.
    :type subscriptions: FrozenSet[str]
    """
    member_id = attr.ib()
    subscriptions = attr.ib(converter=frozenset, default=())


@attr.s(frozen=True, slots=True)
class ReplicaGroup(object):
    """
    A run of members which are replicas of one logical consumer.

    The group is a view into :attr:`MemberGrouping.filtered`: it covers the
    half-open index range ``[start, start + length)``.
    """
    start = attr.ib()
    length = attr.ib()

    @property
    def stop(self):
        return self.start + self.length

    def __len__(self):
        return self.length


@attr.s(frozen=True, slots=True)
class MemberGrouping(object):
    """
    :ivar members: All members, sorted by member ID.
    :ivar filtered: *members* with duplicates removed.
    :ivar groups: Ordered, contiguous :class:`ReplicaGroup` ranges which
        exactly cover *filtered*.
    """
    members = attr.ib()
    filtered = attr.ib()
    groups = attr.ib()

    def group_members(self, group):
        """
        :returns: The members within *group*.
        :rtype: Tuple[GroupMember]
        """
        return self.filtered[group.start:group.stop]


# Requests and responses for consumer groups
@attr.s(frozen=True, slots=True)
class _JoinGroupRequestProtocol(object):
    protocol_name = attr.ib()
    protocol_metadata = attr.ib()


@attr.s(frozen=True, slots=True)
class _JoinGroupProtocolMetadata(object):
    version = attr.ib()
    subscriptions = attr.ib()
    user_data = attr.ib()


@attr.s(frozen=True, slots=True)
class _JoinGroupResponseMember(object):
    member_id = attr.ib()
    member_metadata = attr.ib()


@attr.s(frozen=True, slots=True)
class _SyncGroupRequestMember(object):
    member_id = attr.ib()
    member_metadata = attr.ib()


@attr.s(frozen=True, slots=True)
class _SyncGroupMemberAssignment(object):
    version = attr.ib()
    assignments = attr.ib()
    user_data = attr.ib()


#################
#   Exceptions  #
#################


class AssignmentError(Exception):
    pass


class InputInconsistency(AssignmentError):
    """
    The membership snapshot and the topic metadata disagree, or the metadata
    itself is invalid. No assignment is produced.

    :ivar topics: Names of the offending topics.
    :type topics: List[str]
    """
    def __init__(self, message, topics=()):
        super(InputInconsistency, self).__init__(message)
        self.topics = sorted(topics)


class InvalidReplicaRelation(AssignmentError):
    """
    A replica comparator returned something other than :data:`DISTINCT`,
    :data:`SAME_GROUP`, or :data:`DUPLICATE`.
    """
    pass


class ProtocolError(AssignmentError):
    pass


class BufferUnderflowError(ProtocolError):
    pass

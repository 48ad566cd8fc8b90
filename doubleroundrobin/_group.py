# -*- coding: utf-8 -*-
# Copyright 2018, 2019 Ciena Corporation
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

import collections
import logging

from ._util import _coerce_member_id
from .common import (
    CONSUMER_PROTOCOL_TYPE, REBALANCE_PROTOCOL_EAGER, GroupMember,
    _JoinGroupRequestProtocol, _SyncGroupRequestMember,
)
from .group_assignment import double_round_robin_assignment
from .kafkacodec import KafkaCodec
from .replica import ClientIdReplicaComparator

log = logging.getLogger(__name__)


class DoubleRoundRobinAssignor(object):
    """
    Implement the client-side assignment `Consumer Embedded Protocol`_ with
    the ``doubleroundrobin`` strategy.

    This implementation is stateless and sans-I/O: the group coordinator
    runs the JoinGroup/SyncGroup exchange and calls in here to build the
    protocol payloads. It only supports the eager rebalance protocol, so
    every rebalance revokes and reassigns all partitions.

    :param comparator:
        Replica comparator deciding which members are replicas of one
        another. Defaults to :class:`ClientIdReplicaComparator`, which
        groups members by ``client.id``.

    :param int version:
        Embedded protocol version to send.

    .. Consumer Embedded Protocol:
        https://cwiki.apache.org/confluence/display/KAFKA/Kafka+Client-side+Assignment+Proposal#KafkaClient-sideAssignmentProposal-ConsumerEmbeddedProtocol
    """
    name = "doubleroundrobin"
    protocol_type = CONSUMER_PROTOCOL_TYPE
    rebalance_protocol = REBALANCE_PROTOCOL_EAGER

    def __init__(self, comparator=None, version=0):
        if comparator is None:
            comparator = ClientIdReplicaComparator()
        self.comparator = comparator
        self.version = version

    def __repr__(self):
        return '<{} name={!r} comparator={!r}>'.format(
            self.__class__.__name__, self.name, self.comparator)

    def join_group_protocols(self, topics):
        """
        Get a list of supported protocols.

        :param topics:
            Topics to subscribe to.
        :type topics: List[str]

        :returns:
            Supported protocols, a single-element list. The member metadata
            carries no user data.
        :rtype: List[_JoinGroupRequestProtocol]
        """
        metadata = KafkaCodec.encode_join_group_protocol_metadata(
            version=self.version,
            subscriptions=topics,
            user_data=b'',
        )
        return [_JoinGroupRequestProtocol(self.name, metadata)]

    def assign(self, members, topic_partitions, topics=None):
        """
        Compute the partition assignment for decoded members.

        :param members: Membership snapshot.
        :type members: Iterable[GroupMember]
        :param topic_partitions: Mapping of topic name to partition count.
        :type topic_partitions: Mapping[str, int]
        :param topics: Topics the caller considers eligible, or `None`.

        :returns: Mapping of member ID to ordered partition list.
        :rtype: Dict[str, List[TopicPartition]]

        :raises InputInconsistency: see
            :func:`~doubleroundrobin.group_assignment.double_round_robin_assignment`
        """
        return double_round_robin_assignment(
            members, topic_partitions, self.comparator, topics=topics)

    def generate_assignments(self, members, topic_partitions):
        """
        Assign topic partitions to members.

        This is called on the leader once all group members have joined.

        :param members:
            Member join requests, as returned by
            :meth:`join_group_protocols()`. These requests encode the topics
            members are interested in.
        :type members: List[_JoinGroupResponseMember]

        :param topic_partitions: mapping of topic names to partition IDs
        :type topic_partitions: Mapping[str, List[int]]

        :returns: Member assignments, one per member in *members* order.
            When a member ID repeats, only its first occurrence carries the
            assignment. Later occurrences get an empty one, so no partition
            is handed out twice.
        :rtype: List[_SyncGroupRequestMember]
        """
        group_members = []
        for member in members:
            metadata = KafkaCodec.decode_join_group_protocol_metadata(member.member_metadata)
            group_members.append(GroupMember(
                _coerce_member_id(member.member_id), metadata.subscriptions))

        partition_counts = {
            topic: len(partitions)
            for topic, partitions in topic_partitions.items()
        }
        assignments = self.assign(group_members, partition_counts)
        log.debug("%s: generate_assignments %r", self, assignments)

        encoded_assignments = []
        seen = set()
        for member in group_members:
            by_topic = collections.OrderedDict()
            if member.member_id in seen:
                log.warning("%s: member_id=%r joined more than once, sending an empty assignment",
                            self, member.member_id)
            else:
                seen.add(member.member_id)
                for topic, partition in assignments.get(member.member_id, ()):
                    by_topic.setdefault(topic, []).append(partition)
            encoded = KafkaCodec.encode_sync_group_member_assignment(
                version=self.version,
                assignments=by_topic,
                user_data=b'',
            )
            encoded_assignments.append(_SyncGroupRequestMember(member.member_id, encoded))
        return encoded_assignments

    def decode_assignment(self, assignment):
        """
        Decode a topic partition assignment from the leader.

        :returns: Map of topic name to partition IDs.
        :rtype: Map[str, Tuple[int]]
        """
        assignment = KafkaCodec.decode_sync_group_member_assignment(assignment)
        log.debug("decode_assignment: assignment=%r", assignment)
        return assignment.assignments

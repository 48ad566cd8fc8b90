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

import attr

from ._util import _coerce_partition_count, _coerce_topic
from .common import InputInconsistency, TopicPartition
from .grouping import group_members

log = logging.getLogger(__name__)


@attr.s(slots=True)
class _Cursor(object):
    """
    Round-robin position over *size* slots. A fresh cursor has selected
    nothing, so its first :meth:`advance()` lands on slot 0.
    """
    size = attr.ib()
    position = attr.ib(default=-1)

    def advance(self):
        self.position = (self.position + 1) % self.size
        return self.position


def _distribute(partition_count, grouping):
    """
    Deal out partitions ``0 .. partition_count - 1`` over *grouping*.

    The group cursor moves once per partition. A group's member cursor
    moves only when that group is selected.

    :returns: ``(partition, member)`` pairs in ascending partition order
    """
    groups = grouping.groups
    if not groups:
        return
    group_cursor = _Cursor(len(groups))
    member_cursors = [_Cursor(len(group)) for group in groups]
    for partition in range(partition_count):
        g = group_cursor.advance()
        offset = member_cursors[g].advance()
        yield partition, grouping.filtered[groups[g].start + offset]


def _eligible_topics(members, topic_partitions, topics):
    """
    Determine which topics take part in the assignment, and how many
    partitions each has.

    :returns: Mapping of topic name to partition count.
    :raises InputInconsistency:
        when a topic explicitly named in *topics* has no metadata, or when
        a partition count is invalid
    """
    if topics is None:
        candidates = set()
        for member in members:
            candidates.update(_coerce_topic(topic) for topic in member.subscriptions)
        missing = candidates.difference(topic_partitions)
        if missing:
            log.debug('_eligible_topics: no metadata for %r, excluded', sorted(missing))
        candidates -= missing
    else:
        candidates = {_coerce_topic(topic) for topic in topics}
        missing = candidates.difference(topic_partitions)
        if missing:
            raise InputInconsistency(
                'no partition metadata for topics {!r}'.format(sorted(missing)),
                missing,
            )

    return {
        topic: _coerce_partition_count(topic, topic_partitions[topic])
        for topic in candidates
    }


def double_round_robin_assignment(members, topic_partitions, comparator, topics=None):
    """
    Assign topic partitions to group members with a double round-robin.

    For each topic the members which subscribe to it are clustered into
    replica groups by :func:`~doubleroundrobin.grouping.group_members`.
    Partitions are dealt round-robin across the groups, and within the
    selected group round-robin across its members. Every group is offered
    partitions at the same rate regardless of how many replicas it has.

    For example, suppose members A, B and C subscribe to topic t0 with six
    partitions, A and B being replicas of one consumer. The groups are
    ``[A, B]`` and ``[C]`` and the assignment is:

        A: [t0p0, t0p4]
        B: [t0p2]
        C: [t0p1, t0p3, t0p5]

    :param members: Membership snapshot.
    :type members: Iterable[GroupMember]

    :param topic_partitions: Mapping of topic name to partition count.
        Subscribed topics absent from this mapping are excluded.
    :type topic_partitions: Mapping[str, int]

    :param comparator: Replica comparator, see :mod:`doubleroundrobin.replica`.

    :param topics:
        Topics which the caller considers eligible, or `None` to use every
        subscribed topic with metadata. A topic listed here which no member
        subscribes to is left unassigned.
    :type topics: Optional[Iterable[str]]

    :returns:
        Mapping of member ID to the ordered list of partitions assigned to
        it. Every member is present, possibly with an empty list.
    :rtype: Dict[str, List[TopicPartition]]

    :raises InputInconsistency:
        when metadata for a topic in *topics* is missing or when
        a partition count is invalid. Nothing is assigned.
    """
    members = sorted(members, key=operator.attrgetter('member_id'))
    partition_counts = _eligible_topics(members, topic_partitions, topics)

    assignment = {member.member_id: [] for member in members}
    for topic in sorted(partition_counts):
        subscribers = [m for m in members if topic in m.subscriptions]
        grouping = group_members(subscribers, comparator)
        if not grouping.groups:
            log.debug('doubleroundrobin: topic %r has no eligible members,'
                      ' %d partitions left unassigned', topic, partition_counts[topic])
            continue

        for partition, member in _distribute(partition_counts[topic], grouping):
            log.debug('doubleroundrobin: Member %r: assigned topic %r partition %d',
                      member.member_id, topic, partition)
            assignment[member.member_id].append(TopicPartition(topic, partition))

    return assignment

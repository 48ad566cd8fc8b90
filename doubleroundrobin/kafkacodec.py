# -*- coding: utf-8 -*-
# Copyright (C) 2015 Cyan, Inc.
# Copyright 2017, 2018, 2019 Ciena Corporation

import struct

from ._util import (
    read_int_string, read_topic, relative_unpack, write_int_string,
    write_topic,
)
from .common import (
    ProtocolError, _JoinGroupProtocolMetadata, _SyncGroupMemberAssignment,
)

# Sanity limits applied while decoding, so that garbage input fails fast
# instead of allocating huge lists.
MAX_TOPICS = 100000
MAX_PARTITIONS = 1000000


class KafkaCodec(object):
    """
    Encoding and decoding of the Kafka consumer embedded protocol: the opaque
    member metadata of a JoinGroup request and the opaque member assignment
    of a SyncGroup request. This class does not have any state associated
    with it, it is purely for organization.
    """

    ###################
    #   Private API   #
    ###################

    @classmethod
    def _check_count(cls, what, count, limit):
        if count < 0 or count > limit:
            raise ProtocolError(
                "{} count {:,d} out of range [0, {:,d}]".format(what, count, limit))

    @classmethod
    def _check_consumed(cls, what, version, data, cur):
        # Later versions append fields which older readers skip.
        if version == 0 and cur != len(data):
            raise ProtocolError(
                "{:,d} trailing bytes after {}".format(len(data) - cur, what))

    ##################
    #   Public API   #
    ##################

    @classmethod
    def encode_join_group_protocol_metadata(cls, version, subscriptions, user_data):
        """
        Encode the member metadata of a JoinGroup request.

        :param int version: Embedded protocol version.
        :param subscriptions: Topic names the member subscribes to.
        :type subscriptions: Iterable[str]
        :param bytes user_data: Opaque assignor data, or `None`.
        """
        subscriptions = sorted(subscriptions)
        message = [
            struct.pack('>hi', version, len(subscriptions)),
        ]
        for topic in subscriptions:
            message.append(write_topic(topic))
        message.append(write_int_string(user_data))
        return b''.join(message)

    @classmethod
    def decode_join_group_protocol_metadata(cls, data):
        """
        Decode the member metadata of a JoinGroup response member.

        :param bytes data: bytes to decode
        :rtype: _JoinGroupProtocolMetadata
        """
        ((version, num_subscriptions), cur) = relative_unpack('>hi', data, 0)
        cls._check_count('subscription', num_subscriptions, MAX_TOPICS)

        subscriptions = []
        for _i in range(num_subscriptions):
            (topic, cur) = read_topic(data, cur)
            subscriptions.append(topic)

        (user_data, cur) = read_int_string(data, cur)
        cls._check_consumed('member metadata', version, data, cur)
        return _JoinGroupProtocolMetadata(version, subscriptions, user_data)

    @classmethod
    def encode_sync_group_member_assignment(cls, version, assignments, user_data):
        """
        Encode the assignment of one member for a SyncGroup request.

        :param int version: Embedded protocol version.
        :param assignments: Mapping of topic name to partition IDs.
        :type assignments: Mapping[str, Sequence[int]]
        :param bytes user_data: Opaque assignor data, or `None`.
        """
        message = [struct.pack('>hi', version, len(assignments))]
        for topic, partitions in sorted(assignments.items()):
            message.append(write_topic(topic))
            message.append(struct.pack('>i%di' % len(partitions), len(partitions), *partitions))
        message.append(write_int_string(user_data))
        return b''.join(message)

    @classmethod
    def decode_sync_group_member_assignment(cls, data):
        """
        Decode the member assignment of a SyncGroup response.

        :param bytes data: bytes to decode
        :rtype: _SyncGroupMemberAssignment
        """
        ((version, num_topics), cur) = relative_unpack('>hi', data, 0)
        cls._check_count('topic', num_topics, MAX_TOPICS)

        assignments = {}
        for _i in range(num_topics):
            (topic, cur) = read_topic(data, cur)
            ((num_partitions,), cur) = relative_unpack('>i', data, cur)
            cls._check_count('partition', num_partitions, MAX_PARTITIONS)
            (partitions, cur) = relative_unpack('>%di' % num_partitions, data, cur)
            assignments[topic] = partitions

        (user_data, cur) = read_int_string(data, cur)
        cls._check_consumed('member assignment', version, data, cur)
        return _SyncGroupMemberAssignment(version, assignments, user_data)

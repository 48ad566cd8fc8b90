# -*- coding: utf-8 -*-
# Copyright 2015 Cyan, Inc.
# Copyright 2017, 2018, 2021 Ciena Corporation.
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

import struct

from .common import BufferUnderflowError, InputInconsistency, ProtocolError

_NULL_INT_STRING = struct.pack('>i', -1)


def _buffer_underflow(what, buf, offset, size):
    return BufferUnderflowError((
        "Not enough data to read {what} at offset {offset:,d}: {size:,d} bytes required,"
        " but {available:,d} available."
    ).format(
        what=what,
        offset=offset,
        size=size,
        available=len(buf) - offset,
    ))


def _coerce_topic(topic):
    """
    Ensure that the topic name is text string of a valid length.

    :param topic: Kafka topic name. Valid characters are in the set ``[a-zA-Z0-9._-]``.
    :raises ValueError: when the topic name exceeds 249 bytes
    :raises TypeError: when the topic is not :class:`str`
    """
    if not isinstance(topic, str):
        raise TypeError('topic={!r} must be text'.format(topic))
    if len(topic) < 1:
        raise ValueError('invalid empty topic name')
    if len(topic) > 249:
        raise ValueError('topic={!r} name is too long: {} > 249'.format(
            topic, len(topic)))
    return topic


def _coerce_member_id(member_id):
    """
    Ensure that a group member ID is a text string. Byte strings are decoded
    as UTF-8, matching the wire encoding of member IDs.

    :param member_id: :class:`bytes` or :class:`str` instance
    :raises TypeError: when `member_id` is not :class:`bytes` or :class:`str`
    """
    if not isinstance(member_id, (str, bytes)):
        raise TypeError('member_id={!r} must be text'.format(member_id))
    if not isinstance(member_id, str):
        member_id = member_id.decode('utf-8')
    return member_id


def _coerce_partition_count(topic, count):
    """
    Validate the partition count metadata for a topic.

    :raises InputInconsistency:
        when *count* is not a non-negative integer
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise InputInconsistency(
            'topic={!r} has invalid partition count {!r}'.format(topic, count),
            [topic],
        )
    if count < 0:
        raise InputInconsistency(
            'topic={!r} has negative partition count {:d}'.format(topic, count),
            [topic],
        )
    return count


def write_int_string(s):
    if s is None:
        return _NULL_INT_STRING
    return struct.pack('>i', len(s)) + s


def write_topic(topic):
    """
    Encode a topic name as a Kafka short string: a signed 16-bit length
    followed by the UTF-8 encoded name.

    :raises ValueError: when the topic name is empty or too long
    :raises TypeError: when the topic is not :class:`str`
    """
    encoded = _coerce_topic(topic).encode('utf-8')
    return struct.pack('>h', len(encoded)) + encoded


def read_topic(data, cur):
    """
    Decode a topic name written by :func:`write_topic`.

    :raises ProtocolError: when the name is encoded as null
    """
    ((strlen,), cur) = relative_unpack('>h', data, cur)
    if strlen < 0:
        raise ProtocolError('null topic name at offset {:,d}'.format(cur - 2))
    if len(data) < cur + strlen:
        raise _buffer_underflow('topic name', data, cur, strlen)
    return data[cur:cur + strlen].decode('utf-8'), cur + strlen


def read_int_string(data, cur):
    ((strlen,), cur) = relative_unpack('>i', data, cur)
    if strlen == -1:
        return None, cur
    if len(data) < cur + strlen:
        raise _buffer_underflow('long string', data, cur, strlen)
    return data[cur:cur + strlen], cur + strlen


def relative_unpack(fmt, data, cur):
    size = struct.calcsize(fmt)
    if len(data) < cur + size:
        raise _buffer_underflow(fmt, data, cur, size)

    out = struct.unpack(fmt, data[cur:cur + size])
    return out, cur + size

# -*- coding: utf-8 -*-
# Generated by the protocol buffer compiler.  DO NOT EDIT!
# source: payments/v1/payments.proto
"""Generated protocol buffer code."""
from google.protobuf.internal import builder as _builder
from google.protobuf import descriptor as _descriptor
from google.protobuf import descriptor_pool as _descriptor_pool
from google.protobuf import symbol_database as _symbol_database
# @@protoc_insertion_point(imports)

_sym_db = _symbol_database.Default()


from google.protobuf import timestamp_pb2 as google_dot_protobuf_dot_timestamp__pb2


DESCRIPTOR = _descriptor_pool.Default().AddSerializedFile(b'\n\x1apayments/v1/payments.proto\x12\x0bpayments.v1\x1a\x1fgoogle/protobuf/timestamp.proto\"\xdf\x01\n\x15RequestPaymentRequest\x12\x14\n\x0c\x61mount_minor\x18\x01 \x01(\x03\x12\x10\n\x08\x63urrency\x18\x02 \x01(\t\x12\x10\n\x08order_id\x18\x03 \x01(\t\x12\x17\n\x0fidempotency_key\x18\x04 \x01(\t\x12\x42\n\x08metadata\x18\x05 \x03(\x0b\x32\x30.payments.v1.RequestPaymentRequest.MetadataEntry\x1a/\n\rMetadataEntry\x12\x0b\n\x03key\x18\x01 \x01(\t\x12\r\n\x05value\x18\x02 \x01(\t:\x02\x38\x01\"\xaf\x01\n\x13RequestPaymentReply\x12\x12\n\npayment_id\x18\x01 \x01(\t\x12*\n\x06status\x18\x02 \x01(\x0e\x32\x1a.payments.v1.PaymentStatus\x12\x0f\n\x07message\x18\x03 \x01(\t\x12\x17\n\x0fidempotency_key\x18\x04 \x01(\t\x12.\n\ncreated_at\x18\x05 \x01(\x0b\x32\x1a.google.protobuf.Timestamp\"\'\n\x11GetPaymentRequest\x12\x12\n\npayment_id\x18\x01 \x01(\t\"\xc4\x02\n\x07Payment\x12\x12\n\npayment_id\x18\x01 \x01(\t\x12*\n\x06status\x18\x02 \x01(\x0e\x32\x1a.payments.v1.PaymentStatus\x12\x14\n\x0c\x61mount_minor\x18\x03 \x01(\x03\x12\x10\n\x08\x63urrency\x18\x04 \x01(\t\x12\x10\n\x08order_id\x18\x05 \x01(\t\x12\x17\n\x0fidempotency_key\x18\x06 \x01(\t\x12.\n\ncreated_at\x18\x07 \x01(\x0b\x32\x1a.google.protobuf.Timestamp\x12\x0f\n\x07message\x18\x08 \x01(\t\x12\x34\n\x08metadata\x18\t \x03(\x0b\x32\".payments.v1.Payment.MetadataEntry\x1a/\n\rMetadataEntry\x12\x0b\n\x03key\x18\x01 \x01(\t\x12\r\n\x05value\x18\x02 \x01(\t:\x02\x38\x01\"5\n\x0cPaymentReply\x12%\n\x07payment\x18\x01 \x01(\x0b\x32\x14.payments.v1.Payment\"\x0f\n\rHealthRequest\"\x1d\n\x0bHealthReply\x12\x0e\n\x06status\x18\x01 \x01(\t*H\n\rPaymentStatus\x12\x0f\n\x0bUNSPECIFIED\x10\x00\x12\x0b\n\x07PENDING\x10\x01\x12\r\n\tSUCCEEDED\x10\x02\x12\n\n\x06\x46\x41ILED\x10\x03\x32\xf1\x01\n\x0ePaymentService\x12V\n\x0eRequestPayment\x12\".payments.v1.RequestPaymentRequest\x1a .payments.v1.RequestPaymentReply\x12G\n\nGetPayment\x12\x1e.payments.v1.GetPaymentRequest\x1a\x19.payments.v1.PaymentReply\x12>\n\x06Health\x12\x1a.payments.v1.HealthRequest\x1a\x18.payments.v1.HealthReplyb\x06proto3')

_builder.BuildMessageAndEnumDescriptors(DESCRIPTOR, globals())
_builder.BuildTopDescriptorsAndMessages(DESCRIPTOR, 'payments.v1.payments_pb2', globals())
if _descriptor._USE_C_DESCRIPTORS == False:

  DESCRIPTOR._options = None
  _REQUESTPAYMENTREQUEST_METADATAENTRY._options = None
  _REQUESTPAYMENTREQUEST_METADATAENTRY._serialized_options = b'8\001'
  _PAYMENT_METADATAENTRY._options = None
  _PAYMENT_METADATAENTRY._serialized_options = b'8\001'
  _PAYMENTSTATUS._serialized_start=951
  _PAYMENTSTATUS._serialized_end=1023
  _REQUESTPAYMENTREQUEST._serialized_start=77
  _REQUESTPAYMENTREQUEST._serialized_end=300
  _REQUESTPAYMENTREQUEST_METADATAENTRY._serialized_start=253
  _REQUESTPAYMENTREQUEST_METADATAENTRY._serialized_end=300
  _REQUESTPAYMENTREPLY._serialized_start=303
  _REQUESTPAYMENTREPLY._serialized_end=478
  _GETPAYMENTREQUEST._serialized_start=480
  _GETPAYMENTREQUEST._serialized_end=519
  _PAYMENT._serialized_start=522
  _PAYMENT._serialized_end=846
  _PAYMENT_METADATAENTRY._serialized_start=253
  _PAYMENT_METADATAENTRY._serialized_end=300
  _PAYMENTREPLY._serialized_start=848
  _PAYMENTREPLY._serialized_end=901
  _HEALTHREQUEST._serialized_start=903
  _HEALTHREQUEST._serialized_end=918
  _HEALTHREPLY._serialized_start=920
  _HEALTHREPLY._serialized_end=949
  _PAYMENTSERVICE._serialized_start=1026
  _PAYMENTSERVICE._serialized_end=1267
# @@protoc_insertion_point(module_scope)

from solrzero.client.collections import (Collection, CollectionBuilder,
                                         CollectionsAPI)
from solrzero.client.query import Query
from solrzero.client.schema import SchemaAPI
from solrzero.client.solr import Solr
from solrzero.client.transport import (HTTPTransport, Transport,
                                       TransportResponse)

# Models package - database models
from edupartner.models.partner import PartnerInstitution, Agreement
from edupartner.models.student import Student
from edupartner.models.interaction import Interaction
from edupartner.models.campaign import Campaign
from edupartner.models.reaction import Reaction
from edupartner.models.notification import Notification

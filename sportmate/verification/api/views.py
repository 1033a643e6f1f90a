"""Views for identity verification, user side and admin review."""

import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from sportmate.users.api.permissions import IsPlatformAdmin
from sportmate.users.api.serializers import UserSerializer
from sportmate.verification.models import VerificationDocument
from sportmate.verification.services import submit_documents
from sportmate.verification.services import update_verification_status

from .serializers import VerificationDocumentSerializer
from .serializers import VerificationReviewSerializer
from .serializers import VerificationUploadSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


class VerificationUploadView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = (MultiPartParser, FormParser)

    @extend_schema(tags=["Verification"], request=VerificationUploadSerializer)
    def post(self, request):
        logger.info(
            "Verification upload from user %s, files: %s",
            request.user.pk,
            list(request.FILES.keys()),
        )
        serializer = VerificationUploadSerializer(data=request.data)
        if not serializer.is_valid():
            missing = {"selfie", "governmentId"} - set(request.FILES.keys())
            if missing:
                return Response(
                    {"message": "Both selfie and government ID files are required"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            return Response(
                {"message": "Invalid verification upload", "errors": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        selfie, government_id = submit_documents(
            request.user,
            serializer.validated_data["selfie"],
            serializer.validated_data["governmentId"],
        )
        return Response(
            {
                "selfie": VerificationDocumentSerializer(selfie).data,
                "governmentId": VerificationDocumentSerializer(government_id).data,
                "message": "Verification documents uploaded successfully",
            },
            status=status.HTTP_201_CREATED,
        )


class VerificationDocumentListView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Verification"])
    def get(self, request):
        docs = VerificationDocument.objects.filter(user=request.user)
        return Response(VerificationDocumentSerializer(docs, many=True).data)


class AdminVerificationQueueView(APIView):
    """Pending documents, grouped per user for side-by-side review."""

    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    @extend_schema(tags=["Admin"])
    def get(self, request):
        docs = (
            VerificationDocument.objects.filter(
                review_status=VerificationDocument.ReviewStatus.PENDING
            )
            .select_related("user")
            .order_by("uploaded_at", "id")
        )
        grouped: dict[int, dict] = {}
        for doc in docs:
            entry = grouped.get(doc.user_id)
            if entry is None:
                entry = grouped[doc.user_id] = {
                    "userId": doc.user_id,
                    "userEmail": doc.user.email,
                    "userFirstName": doc.user.first_name,
                    "userLastName": doc.user.last_name,
                    "userProfileImage": doc.user.profile_image_url,
                    "documents": [],
                }
            entry["documents"].append(VerificationDocumentSerializer(doc).data)
        return Response(list(grouped.values()))


class AdminVerificationReviewView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    @extend_schema(tags=["Admin"], request=VerificationReviewSerializer)
    def post(self, request, user_id):
        user = get_object_or_404(User, pk=user_id)
        serializer = VerificationReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        update_verification_status(
            user,
            serializer.validated_data["status"],
            review_notes=serializer.validated_data["reviewNotes"],
            reviewed_by=request.user,
        )
        return Response(UserSerializer(user).data)

"""
Django Forms para validação de entrada do kanban.

Forms validam a estrutura (campos, escolhas) e convertem para
DTOs; regras de negócio ficam nas entidades e use cases.
"""

from typing import Iterable, List, Tuple

from django import forms

from painel.core.instalacoes.dtos import ArquivoUploadDTO
from painel.core.instalacoes.entities import PrioridadeInstalacao, StatusInstalacao


STATUS_CHOICES = [(s.value, s.label) for s in StatusInstalacao.colunas()]
PRIORIDADE_CHOICES = [(p.value, p.label) for p in PrioridadeInstalacao]


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleFileField(forms.FileField):
    """FileField que aceita vários arquivos e devolve uma lista."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('widget', MultipleFileInput())
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            return [single_file_clean(d, initial) for d in data]
        if not data:
            return []
        return [single_file_clean(data, initial)]


def arquivos_para_dto(arquivos: Iterable) -> Tuple[ArquivoUploadDTO, ...]:
    """Converte UploadedFile do Django em ArquivoUploadDTO."""
    return tuple(
        ArquivoUploadDTO(
            nome=arquivo.name,
            conteudo=arquivo.read(),
            content_type=getattr(arquivo, 'content_type', None),
        )
        for arquivo in arquivos
        if arquivo
    )


class InstalacaoForm(forms.Form):
    """
    Form de nova instalação.

    Valida dados básicos antes de passar para CriarInstalacaoService.
    """

    telefone = forms.CharField(
        label='Telefone',
        max_length=50,
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': '(00) 00000-0000',
        }),
    )

    dominio = forms.CharField(
        label='Domínio',
        max_length=255,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'exemplo.com.br',
        }),
        error_messages={
            'required': 'Informe o domínio.',
        },
    )

    acessos = forms.CharField(
        label='Acessos',
        required=False,
        widget=forms.Textarea(attrs={
            'class': 'form-control',
            'rows': 4,
            'placeholder': 'Cole ou descreva todos os acessos aqui...',
        }),
    )

    prioridade = forms.ChoiceField(
        label='Prioridade',
        choices=PRIORIDADE_CHOICES,
        initial=PrioridadeInstalacao.NORMAL.value,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )

    coletar_acessos = forms.BooleanField(
        label='Coletar acessos',
        required=False,
    )

    arquivos = MultipleFileField(
        label='Anexos',
        required=False,
    )

    def clean_dominio(self):
        dominio = self.cleaned_data['dominio'].strip()
        if not dominio:
            raise forms.ValidationError('Informe o domínio.')
        return dominio

    def clean_telefone(self):
        return self.cleaned_data.get('telefone', '').strip()


class InstalacaoEditForm(InstalacaoForm):
    """
    Form de edição manual.

    Inclui a coluna (status) e os anexos atuais que devem ser mantidos.
    """

    status = forms.ChoiceField(
        label='Status',
        choices=STATUS_CHOICES,
        widget=forms.Select(attrs={'class': 'form-control'}),
    )

    manter_arquivos = forms.MultipleChoiceField(
        label='Anexos atuais',
        required=False,
        widget=forms.CheckboxSelectMultiple,
    )

    def __init__(self, *args, arquivos_atuais: List[dict] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['manter_arquivos'].choices = [
            (a['url'], a['name']) for a in (arquivos_atuais or [])
        ]


class MoverInstalacaoForm(forms.Form):
    """Intenção de mover um cartão (drag-and-drop ou seletor)."""

    de_status = forms.ChoiceField(
        choices=STATUS_CHOICES,
        required=False,
    )

    para_status = forms.ChoiceField(
        choices=STATUS_CHOICES,
        error_messages={
            'required': 'Informe a coluna de destino.',
            'invalid_choice': 'Status inválido.',
        },
    )

    def clean_de_status(self):
        return self.cleaned_data.get('de_status') or None
